"""Command-runner interface for talking to git as an external process."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Captured outcome of one git invocation."""

    args: list[str] = Field(default_factory=list)
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@runtime_checkable
class GitRunner(Protocol):
    """Runs `git <args>` in a working directory.

    Implementations report failure through `exit_code`, not by raising.
    """

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult: ...
