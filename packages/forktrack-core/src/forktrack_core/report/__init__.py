from .renderers import (
    CSV_HEADER,
    group_by_repository,
    render_csv,
    render_json,
    render_reconcile_summary,
    render_summary,
    render_table,
)
from .summary import BranchSummary

__all__ = [
    "CSV_HEADER",
    "BranchSummary",
    "group_by_repository",
    "render_csv",
    "render_json",
    "render_reconcile_summary",
    "render_summary",
    "render_table",
]
