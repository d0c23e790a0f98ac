"""Render branch records and run statistics as table, JSON, or CSV.

Renderers are pure: they take records and return a string or a Rich
renderable. Nothing here re-sorts records.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import UTC, datetime

from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from forktrack_core.branches import BranchState, BranchStatus
from forktrack_core.remotes import ReconcileStats
from forktrack_core.report.summary import BranchSummary

CSV_HEADER = "Repository,Branch,Remote,Status,Ahead,Behind,IsDefault,Tracking"
DEFAULT_MARKER = "◆"

_STATUS_STYLES = {
    BranchState.synced: "green",
    BranchState.ahead: "cyan",
    BranchState.behind: "yellow",
    BranchState.diverged: "red",
    BranchState.no_remote_branch: "yellow",
    BranchState.remote_inaccessible: "yellow",
}


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _count(n: int) -> str:
    return str(n) if n > 0 else "-"


def group_by_repository(records: Sequence[BranchStatus]) -> dict[str, list[BranchStatus]]:
    """Group records by repository, keeping first-seen group order."""
    groups: dict[str, list[BranchStatus]] = {}
    for r in records:
        groups.setdefault(r.repository, []).append(r)
    return groups


def render_json(
    records: Sequence[BranchStatus],
    remote: str,
    timestamp: datetime | None = None,
) -> str:
    ts = (timestamp or datetime.now(UTC)).astimezone(UTC)
    payload = {
        "timestamp": ts.isoformat().replace("+00:00", "Z"),
        "remoteName": remote,
        "results": [r.model_dump(mode="json", by_alias=True) for r in records],
        "summary": BranchSummary.from_records(records).model_dump(by_alias=True),
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_csv(records: Sequence[BranchStatus]) -> str:
    """Header plus one comma-joined line per record.

    Fields are not quoted; names containing commas will shift columns.
    """
    lines = [CSV_HEADER]
    for r in records:
        lines.append(",".join([
            r.repository,
            r.branch,
            r.remote,
            r.status.label,
            str(r.ahead),
            str(r.behind),
            _bool(r.is_default),
            _bool(r.tracking_ok),
        ]))
    return "\n".join(lines)


def _repository_table(repository: str, records: list[BranchStatus], verbose: bool) -> Table:
    table = Table(title=repository, title_style="bold cyan", title_justify="left")
    table.add_column("", width=1, no_wrap=True)
    table.add_column("Branch", style="bold")
    table.add_column("Status", no_wrap=True)
    table.add_column("Ahead", justify="right")
    table.add_column("Behind", justify="right")
    if verbose:
        table.add_column("Tracking", style="dim")
        table.add_column("Local", style="dim")
        table.add_column("Remote", style="dim")

    for r in records:
        row = [
            DEFAULT_MARKER if r.is_default else "",
            r.branch,
            Text(r.status.label, style=_STATUS_STYLES[r.status]),
            _count(r.ahead),
            _count(r.behind),
        ]
        if verbose:
            row += [r.remote_ref, r.local_hash, r.remote_hash]
        table.add_row(*row)
    return table


def render_table(records: Sequence[BranchStatus], verbose: bool = False) -> RenderableType:
    if not records:
        return Text("No branches found")
    tables = [
        _repository_table(repo, group, verbose)
        for repo, group in group_by_repository(records).items()
    ]
    return Group(*tables)


def render_summary(summary: BranchSummary) -> RenderableType:
    lines = [
        Text("Summary:", style="bold cyan"),
        Text(f"  Total Branches:    {summary.total}"),
        Text(f"  ✓ Synced:          {summary.synced}", style="green"),
        Text(f"  ⬆ Ahead Only:      {summary.ahead_only}", style="cyan"),
        Text(f"  ⬇ Behind Only:     {summary.behind_only}", style="yellow"),
        Text(f"  ⬍ Diverged:        {summary.diverged}", style="red"),
        Text(f"  ⚠ Untracked:       {summary.untracked}", style="yellow"),
    ]
    return Group(*lines)


def render_reconcile_summary(stats: ReconcileStats, dry_run: bool = False) -> RenderableType:
    lines = [
        Text("Summary:", style="bold cyan"),
        Text(f"  Processed: {stats.processed}"),
        Text(f"  Skipped:   {stats.skipped}"),
        Text(f"  Errors:    {stats.errors}", style="yellow" if stats.errors else "green"),
    ]
    if dry_run:
        lines.append(Text(f"  Planned:   {stats.planned}"))
        lines.append(Text(""))
        lines.append(Text(
            "[DRY RUN MODE] No changes were made. Run without --dry-run to apply changes.",
            style="yellow",
        ))
    return Group(*lines)
