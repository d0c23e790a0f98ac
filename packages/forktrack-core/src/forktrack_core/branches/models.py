"""Pydantic models for branch divergence records."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

NOT_AVAILABLE = "N/A"
HASH_PREFIX_LENGTH = 7


class BranchState(str, Enum):
    """Where a local branch stands relative to its tracking ref."""

    synced = "synced"
    ahead = "ahead"
    behind = "behind"
    diverged = "diverged"
    no_remote_branch = "no_remote_branch"
    remote_inaccessible = "remote_inaccessible"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    BranchState.synced: "✓ Synced",
    BranchState.ahead: "⬆ Ahead",
    BranchState.behind: "⬇ Behind",
    BranchState.diverged: "⬍ Diverged",
    BranchState.no_remote_branch: "⚠ No remote branch",
    BranchState.remote_inaccessible: "⚠ Remote not accessible",
}


def classify(ahead: int, behind: int) -> BranchState:
    """Map commit counts onto one of the four tracked states."""
    if ahead < 0 or behind < 0:
        raise ValueError(f"commit counts must be non-negative, got ({ahead}, {behind})")
    if ahead == 0 and behind == 0:
        return BranchState.synced
    if behind == 0:
        return BranchState.ahead
    if ahead == 0:
        return BranchState.behind
    return BranchState.diverged


def short_hash(commit: str) -> str:
    """First seven characters of a commit id; shorter ids are returned whole."""
    return commit[:HASH_PREFIX_LENGTH]


class BranchStatus(BaseModel):
    """One (repository, local branch) row of the report."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    repository: str
    branch: str
    remote: str
    remote_ref: str = NOT_AVAILABLE
    ahead: int = Field(default=0, ge=0)
    behind: int = Field(default=0, ge=0)
    status: BranchState
    local_hash: str
    remote_hash: str = NOT_AVAILABLE
    is_default: bool = False
    tracking_ok: bool = False

    @field_serializer("status")
    def _serialize_status(self, status: BranchState) -> str:
        return status.label
