"""forktrack core - upstream remote setup and branch divergence reporting for submodules."""

from forktrack_core.branches import BranchAnalyzer, BranchState, BranchStatus, collect_statuses
from forktrack_core.config import ForktrackConfig, load_config
from forktrack_core.git import CommandResult, GitRunner, SubprocessGitRunner
from forktrack_core.gitmodules import SubmoduleEntry, load_gitmodules, parse_gitmodules
from forktrack_core.remotes import UpstreamReconciler

__version__ = "0.1.0"

__all__ = [
    "BranchAnalyzer",
    "BranchState",
    "BranchStatus",
    "CommandResult",
    "ForktrackConfig",
    "GitRunner",
    "SubmoduleEntry",
    "SubprocessGitRunner",
    "UpstreamReconciler",
    "collect_statuses",
    "load_config",
    "load_gitmodules",
    "parse_gitmodules",
]
