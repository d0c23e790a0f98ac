"""subprocess-backed GitRunner."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from forktrack_core.errors import GitNotAvailable
from forktrack_core.git.base import CommandResult

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124


class SubprocessGitRunner:
    """Invokes git with an explicit argument list, never through a shell."""

    def __init__(self, executable: str = "git", timeout: int = 120) -> None:
        self.executable = executable
        self.timeout = timeout

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        argv = [self.executable, *args]
        logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
        try:
            proc = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            # Also raised for a missing cwd
            if not Path(cwd).is_dir():
                raise
            raise GitNotAvailable(self.executable) from e
        except subprocess.TimeoutExpired:
            logger.warning(
                "git %s timed out after %ds in %s", " ".join(args), self.timeout, cwd
            )
            return CommandResult(
                args=list(args),
                stderr=f"timed out after {self.timeout}s",
                exit_code=TIMEOUT_EXIT_CODE,
            )

        if proc.returncode != 0:
            logger.debug(
                "git %s exited %d: %s", " ".join(args), proc.returncode, proc.stderr[:200]
            )
        return CommandResult(
            args=list(args),
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            exit_code=proc.returncode,
        )
