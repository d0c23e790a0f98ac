"""Pydantic models for upstream remote reconciliation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ReconcileOutcome(str, Enum):
    """What happened to one submodule entry."""

    already_configured = "already_configured"
    added = "added"
    updated = "updated"
    would_add = "would_add"
    would_update = "would_update"
    skipped = "skipped"
    failed = "failed"

    @property
    def is_success(self) -> bool:
        return self in (
            ReconcileOutcome.already_configured,
            ReconcileOutcome.added,
            ReconcileOutcome.updated,
        )

    @property
    def is_planned(self) -> bool:
        return self in (ReconcileOutcome.would_add, ReconcileOutcome.would_update)


class ReconcileResult(BaseModel):
    name: str
    path: str | None = None
    upstream: str | None = None
    outcome: ReconcileOutcome
    current_url: str | None = None
    message: str = ""


class ReconcileStats(BaseModel):
    """Running counts for one configurator run."""

    processed: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)
    errors: int = Field(default=0, ge=0)
    planned: int = Field(default=0, ge=0)

    def record(self, outcome: ReconcileOutcome) -> None:
        if outcome.is_success:
            self.processed += 1
        elif outcome.is_planned:
            self.planned += 1
        elif outcome is ReconcileOutcome.skipped:
            self.skipped += 1
        else:
            self.errors += 1


class ReconcileReport(BaseModel):
    results: list[ReconcileResult] = Field(default_factory=list)
    stats: ReconcileStats = Field(default_factory=ReconcileStats)
    dry_run: bool = False
    aborted: str | None = None

    @property
    def ok(self) -> bool:
        return self.stats.errors == 0 and self.aborted is None
