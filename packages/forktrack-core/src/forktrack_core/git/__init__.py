from .base import CommandResult, GitRunner
from .commands import Git, parse_left_right
from .runner import SubprocessGitRunner

__all__ = [
    "CommandResult",
    "Git",
    "GitRunner",
    "SubprocessGitRunner",
    "parse_left_right",
]
