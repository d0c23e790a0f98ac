"""Ahead/behind analysis of local branches against a remote."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from forktrack_core.branches.models import (
    BranchState,
    BranchStatus,
    classify,
    short_hash,
)
from forktrack_core.branches.patterns import MATCH_ALL, match_branch
from forktrack_core.errors import NotARepository
from forktrack_core.git import Git, GitRunner

logger = logging.getLogger(__name__)


class BranchAnalyzer:
    """Computes one BranchStatus per local branch of a repository."""

    def __init__(
        self,
        runner: GitRunner,
        remote: str = "upstream",
        pattern: str = MATCH_ALL,
        head_remote: str = "origin",
    ) -> None:
        self.runner = runner
        self.remote = remote
        self.pattern = pattern
        self.head_remote = head_remote

    def analyze(self, repo_path: str | Path) -> list[BranchStatus]:
        """Analyze every local branch matching the pattern.

        Raises NotARepository if `repo_path` has no .git entry. A failed
        fetch is logged and the existing remote-tracking refs are used.
        """
        repo_path = Path(repo_path)
        if not (repo_path / ".git").exists():
            raise NotARepository(repo_path)

        repo_name = repo_path.resolve().name
        git = Git(self.runner, repo_path)

        if not git.fetch(self.remote):
            logger.warning("Fetch of %s failed in %s; using cached refs", self.remote, repo_name)

        default_branch = git.head_branch(self.head_remote)
        if default_branch is None:
            logger.debug("No %s/HEAD in %s; default branch unknown", self.head_remote, repo_name)

        records: list[BranchStatus] = []
        for branch in git.local_branches():
            if not match_branch(branch, self.pattern):
                continue
            record = self._analyze_branch(git, repo_name, branch, default_branch)
            if record is not None:
                records.append(record)
        return records

    def _analyze_branch(
        self, git: Git, repo_name: str, branch: str, default_branch: str | None
    ) -> BranchStatus | None:
        local_commit = git.rev_parse(branch)
        if not local_commit:
            logger.debug("Cannot resolve %s in %s; skipping", branch, repo_name)
            return None

        base = {
            "repository": repo_name,
            "branch": branch,
            "remote": self.remote,
            "local_hash": short_hash(local_commit),
            "is_default": branch == default_branch,
        }

        tracking = git.upstream_of(branch)
        if tracking is None:
            fallback = f"{self.remote}/{branch}"
            if not git.verify_ref(fallback):
                return BranchStatus(**base, status=BranchState.no_remote_branch)
            tracking = fallback

        remote_commit = git.rev_parse(tracking)
        if not remote_commit:
            return BranchStatus(
                **base, remote_ref=tracking, status=BranchState.remote_inaccessible
            )

        behind, ahead = git.count_left_right(tracking, branch)
        return BranchStatus(
            **base,
            remote_ref=tracking,
            ahead=ahead,
            behind=behind,
            status=classify(ahead, behind),
            remote_hash=short_hash(remote_commit),
            tracking_ok=True,
        )


@dataclass
class StatusCollection:
    """Records from several repositories, in target order."""

    records: list[BranchStatus] = field(default_factory=list)
    failed_targets: list[Path] = field(default_factory=list)

    @property
    def all_tracked(self) -> bool:
        return all(r.tracking_ok for r in self.records)


def collect_statuses(
    targets: Sequence[str | Path],
    analyzer: BranchAnalyzer,
    max_workers: int = 1,
    on_target: Callable[[Path], None] | None = None,
) -> StatusCollection:
    """Run the analyzer over each target and concatenate the results.

    With max_workers > 1 targets are analyzed in parallel; output order is
    always the order of `targets`.
    """
    paths = [Path(t) for t in targets]

    def _one(path: Path) -> list[BranchStatus] | NotARepository:
        if on_target is not None:
            on_target(path)
        try:
            return analyzer.analyze(path)
        except NotARepository as e:
            logger.error("%s", e)
            return e

    if max_workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(_one, paths))
    else:
        outcomes = [_one(p) for p in paths]

    collection = StatusCollection()
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, NotARepository):
            collection.failed_targets.append(path)
        else:
            collection.records.extend(outcome)
    return collection
