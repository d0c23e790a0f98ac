"""Aggregate counts over a set of branch records."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from forktrack_core.branches import BranchState, BranchStatus


class BranchSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int = 0
    synced: int = 0
    ahead_only: int = 0
    behind_only: int = 0
    diverged: int = 0
    untracked: int = 0

    @classmethod
    def from_records(cls, records: Iterable[BranchStatus]) -> BranchSummary:
        """Each record lands in exactly one bucket; untracked wins over counts."""
        summary = cls()
        for r in records:
            summary.total += 1
            if not r.tracking_ok:
                summary.untracked += 1
            elif r.status is BranchState.synced:
                summary.synced += 1
            elif r.status is BranchState.ahead:
                summary.ahead_only += 1
            elif r.status is BranchState.behind:
                summary.behind_only += 1
            else:
                summary.diverged += 1
        return summary
