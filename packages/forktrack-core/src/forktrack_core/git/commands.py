"""Typed wrappers over the handful of git subcommands forktrack needs."""

from __future__ import annotations

import re
from pathlib import Path

from forktrack_core.errors import RemoteOperationFailed
from forktrack_core.git.base import CommandResult, GitRunner

_LEFT_RIGHT_RE = re.compile(r"^\s*(\d+)\s+(\d+)\s*$")


def parse_left_right(text: str) -> tuple[int, int]:
    """Parse `rev-list --count --left-right A...B` output into (left, right).

    Anything other than exactly two non-negative integers yields (0, 0).
    """
    match = _LEFT_RIGHT_RE.match(text or "")
    if match is None:
        return 0, 0
    return int(match.group(1)), int(match.group(2))


class Git:
    """git bound to one working directory.

    Query methods return None (or an empty list) when git exits non-zero;
    remote-mutating methods raise RemoteOperationFailed.
    """

    def __init__(self, runner: GitRunner, cwd: str | Path) -> None:
        self.runner = runner
        self.cwd = Path(cwd)

    def _run(self, *args: str) -> CommandResult:
        return self.runner.run(list(args), self.cwd)

    def _query(self, *args: str) -> str | None:
        result = self._run(*args)
        if not result.ok:
            return None
        return result.stdout.strip()

    def _mutate(self, operation: str, *args: str) -> None:
        result = self._run(*args)
        if not result.ok:
            raise RemoteOperationFailed(operation, args, result.exit_code, result.stderr)

    # -- remotes ---------------------------------------------------------

    def remotes(self) -> list[str]:
        out = self._query("remote")
        return [line.strip() for line in (out or "").splitlines() if line.strip()]

    def remote_get_url(self, name: str) -> str | None:
        return self._query("remote", "get-url", name) or None

    def remote_add(self, name: str, url: str) -> None:
        self._mutate("remote add", "remote", "add", name, url)

    def remote_set_url(self, name: str, url: str) -> None:
        self._mutate("remote set-url", "remote", "set-url", name, url)

    def fetch(self, remote: str) -> bool:
        return self._run("fetch", remote, "--quiet").ok

    # -- refs ------------------------------------------------------------

    def head_branch(self, remote: str) -> str | None:
        """Branch named by `<remote>/HEAD`, without the remote prefix."""
        out = self._query("rev-parse", "--abbrev-ref", f"{remote}/HEAD")
        if not out:
            return None
        prefix = f"{remote}/"
        if out.startswith(prefix):
            out = out[len(prefix):]
        if not out or out == "HEAD":
            return None
        return out

    def local_branches(self) -> list[str]:
        out = self._query("branch", "--format=%(refname:short)")
        return [line.strip() for line in (out or "").splitlines() if line.strip()]

    def rev_parse(self, ref: str) -> str | None:
        return self._query("rev-parse", ref) or None

    def upstream_of(self, branch: str) -> str | None:
        """Tracking ref of `branch`, or None if unset.

        When no upstream is configured some git versions echo the unexpanded
        `<branch>@{u}` argument back; that counts as unset.
        """
        placeholder = f"{branch}@{{u}}"
        out = self._query("rev-parse", "--abbrev-ref", placeholder)
        if not out or out == placeholder:
            return None
        return out

    def verify_ref(self, ref: str) -> bool:
        return self._run("rev-parse", "--verify", ref).ok

    def count_left_right(self, left: str, right: str) -> tuple[int, int]:
        out = self._query("rev-list", "--count", "--left-right", f"{left}...{right}")
        return parse_left_right(out or "")
