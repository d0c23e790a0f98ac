from .analyzer import BranchAnalyzer, StatusCollection, collect_statuses
from .models import (
    NOT_AVAILABLE,
    BranchState,
    BranchStatus,
    classify,
    short_hash,
)
from .patterns import MATCH_ALL, match_branch

__all__ = [
    "MATCH_ALL",
    "NOT_AVAILABLE",
    "BranchAnalyzer",
    "BranchState",
    "BranchStatus",
    "StatusCollection",
    "classify",
    "collect_statuses",
    "match_branch",
    "short_hash",
]
