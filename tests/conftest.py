"""Shared test fixtures for forktrack."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from forktrack_core.config.models import ForktrackConfig
from forktrack_core.git import CommandResult


class FakeGitRunner:
    """Scripted GitRunner: responses keyed by (cwd name, args).

    Unscripted commands exit 1 with empty output. Every call is recorded
    as (cwd, args) so tests can assert what ran.
    """

    def __init__(self) -> None:
        self.responses: dict[tuple[str | None, tuple[str, ...]], CommandResult] = {}
        self.calls: list[tuple[Path, tuple[str, ...]]] = []

    def script(
        self,
        args: Sequence[str],
        stdout: str = "",
        exit_code: int = 0,
        stderr: str = "",
        repo: str | None = None,
    ) -> None:
        self.responses[(repo, tuple(args))] = CommandResult(
            args=list(args), stdout=stdout, stderr=stderr, exit_code=exit_code
        )

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        key = tuple(args)
        self.calls.append((Path(cwd), key))
        for repo in (Path(cwd).name, None):
            if (repo, key) in self.responses:
                return self.responses[(repo, key)]
        return CommandResult(args=list(args), stderr="unscripted", exit_code=1)

    def commands(self) -> list[tuple[str, ...]]:
        return [args for _, args in self.calls]

    def mutating_calls(self) -> list[tuple[str, ...]]:
        return [
            args for args in self.commands()
            if args[:2] in (("remote", "add"), ("remote", "set-url"))
        ]


@pytest.fixture
def fake_git():
    return FakeGitRunner()


@pytest.fixture
def sample_config():
    return ForktrackConfig()


@pytest.fixture
def make_repo(tmp_path):
    """Create a directory that looks like an initialized repo (has .git)."""

    def _make(name: str, git_file: bool = False) -> Path:
        repo = tmp_path / name
        repo.mkdir(parents=True, exist_ok=True)
        if git_file:
            (repo / ".git").write_text(f"gitdir: ../.git/modules/{name}\n")
        else:
            (repo / ".git").mkdir()
        return repo

    return _make


def script_branch(
    fake: FakeGitRunner,
    branch: str,
    local_commit: str,
    tracking: str | None,
    remote_commit: str | None,
    behind: int = 0,
    ahead: int = 0,
    repo: str | None = None,
) -> None:
    """Script the per-branch rev-parse/rev-list calls the analyzer makes."""
    fake.script(["rev-parse", branch], stdout=local_commit + "\n", repo=repo)
    if tracking is not None:
        fake.script(
            ["rev-parse", "--abbrev-ref", f"{branch}@{{u}}"], stdout=tracking + "\n", repo=repo
        )
        if remote_commit is not None:
            fake.script(["rev-parse", tracking], stdout=remote_commit + "\n", repo=repo)
            fake.script(
                ["rev-list", "--count", "--left-right", f"{tracking}...{branch}"],
                stdout=f"{behind}\t{ahead}\n",
                repo=repo,
            )


@pytest.fixture
def sample_gitmodules():
    return (
        '[submodule "lib"]\n'
        "\tpath = lib\n"
        "\turl = https://github.com/me/lib.git\n"
        "\tupstream = https://example.com/lib.git\n"
        '[submodule "docs"]\n'
        "\tpath = vendor/docs\n"
        "\turl = https://github.com/me/docs.git\n"
    )
