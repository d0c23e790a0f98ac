"""Exception taxonomy shared by the reconciler, analyzer, and CLI."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class ForktrackError(Exception):
    """Base class for all forktrack errors."""


class ConfigNotFound(ForktrackError):
    """The extended .gitmodules file does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f".gitmodules file not found at: {self.path}")


class SubmoduleSkipped(ForktrackError):
    """A submodule entry cannot be reconciled (missing key, path, or .git)."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"skipping '{name}': {reason}")


class RemoteOperationFailed(ForktrackError):
    """A remote-mutating git command exited non-zero."""

    def __init__(
        self, operation: str, args: Sequence[str], exit_code: int, stderr: str
    ) -> None:
        self.operation = operation
        self.args_used = list(args)
        self.exit_code = exit_code
        self.stderr = stderr.strip()
        detail = self.stderr or f"exit code {exit_code}"
        super().__init__(f"git {operation} failed: {detail}")


class NotARepository(ForktrackError):
    """A reporter target has no .git entry."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Not a git repository: {self.path}")


class GitNotAvailable(ForktrackError):
    """The git executable could not be started."""

    def __init__(self, executable: str) -> None:
        self.executable = executable
        super().__init__(f"git executable not found: {executable}")


class InvalidConfig(ForktrackError, ValueError):
    """forktrack.yaml could not be parsed or validated."""

    def __init__(self, path: str | Path, detail: str) -> None:
        self.path = Path(path)
        super().__init__(f"Invalid config in {self.path}: {detail}")
