"""Make each submodule's `upstream` remote match its .gitmodules declaration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from forktrack_core.errors import GitNotAvailable, RemoteOperationFailed, SubmoduleSkipped
from forktrack_core.git import Git, GitRunner
from forktrack_core.gitmodules import SubmoduleEntry
from forktrack_core.remotes.models import (
    ReconcileOutcome,
    ReconcileReport,
    ReconcileResult,
)

logger = logging.getLogger(__name__)


class UpstreamReconciler:
    """Adds or corrects one named remote per submodule.

    Entries are processed one at a time in name order. Failures are recorded
    per entry and never stop the run.
    """

    def __init__(
        self,
        runner: GitRunner,
        base_dir: str | Path = ".",
        remote_name: str = "upstream",
        dry_run: bool = False,
    ) -> None:
        self.runner = runner
        self.base_dir = Path(base_dir)
        self.remote_name = remote_name
        self.dry_run = dry_run

    def reconcile(
        self,
        entries: Mapping[str, SubmoduleEntry],
        on_result: Callable[[ReconcileResult], None] | None = None,
    ) -> ReconcileReport:
        """Reconcile every entry; `on_result` is called after each one.

        If git cannot be started the run stops there and the report keeps
        the counts of the entries handled so far, with `aborted` set.
        """
        report = ReconcileReport(dry_run=self.dry_run)
        for name in sorted(entries):
            try:
                result = self.reconcile_entry(entries[name])
            except GitNotAvailable as e:
                logger.error("Stopping at %s: %s", name, e)
                report.aborted = str(e)
                break
            report.results.append(result)
            report.stats.record(result.outcome)
            if on_result is not None:
                on_result(result)
        return report

    def reconcile_entry(self, entry: SubmoduleEntry) -> ReconcileResult:
        try:
            workdir = self._check_entry(entry)
        except SubmoduleSkipped as e:
            logger.info("Skipping %s: %s", entry.name, e.reason)
            return self._result(entry, ReconcileOutcome.skipped, message=e.reason)

        git = Git(self.runner, workdir)
        expected = entry.upstream
        try:
            current = None
            if self.remote_name in git.remotes():
                current = git.remote_get_url(self.remote_name)

            if current is None:
                if self.dry_run:
                    return self._result(
                        entry, ReconcileOutcome.would_add,
                        message=f"would add {self.remote_name} remote",
                    )
                git.remote_add(self.remote_name, expected)
                logger.info("Added %s remote to %s", self.remote_name, entry.name)
                return self._result(
                    entry, ReconcileOutcome.added,
                    message=f"{self.remote_name} remote added",
                )

            if current == expected:
                return self._result(
                    entry, ReconcileOutcome.already_configured, current_url=current,
                    message=f"{self.remote_name} already configured correctly",
                )

            logger.warning(
                "%s: %s remote points at %s, expected %s",
                entry.name, self.remote_name, current, expected,
            )
            if self.dry_run:
                return self._result(
                    entry, ReconcileOutcome.would_update, current_url=current,
                    message=f"would update {self.remote_name} remote",
                )
            git.remote_set_url(self.remote_name, expected)
            logger.info("Updated %s remote of %s", self.remote_name, entry.name)
            return self._result(
                entry, ReconcileOutcome.updated, current_url=current,
                message=f"{self.remote_name} remote updated",
            )
        except (RemoteOperationFailed, OSError) as e:
            logger.error("%s: %s", entry.name, e)
            return self._result(entry, ReconcileOutcome.failed, message=str(e))

    def _check_entry(self, entry: SubmoduleEntry) -> Path:
        """Return the submodule working tree, or raise SubmoduleSkipped."""
        if not entry.path:
            raise SubmoduleSkipped(entry.name, "no path defined")
        if not entry.upstream:
            raise SubmoduleSkipped(entry.name, "no upstream URL defined")
        workdir = entry.resolve_path(self.base_dir)
        if not workdir.is_dir():
            raise SubmoduleSkipped(entry.name, f"path not found '{entry.path}'")
        # Initialized submodules usually carry a .git file, not a directory
        if not (workdir / ".git").exists():
            raise SubmoduleSkipped(
                entry.name, ".git not found (submodule may not be initialized)"
            )
        return workdir

    @staticmethod
    def _result(
        entry: SubmoduleEntry,
        outcome: ReconcileOutcome,
        current_url: str | None = None,
        message: str = "",
    ) -> ReconcileResult:
        return ReconcileResult(
            name=entry.name,
            path=entry.path,
            upstream=entry.upstream,
            outcome=outcome,
            current_url=current_url,
            message=message,
        )
