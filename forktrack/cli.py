"""CLI entry point for forktrack."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from forktrack_core.branches import BranchAnalyzer, collect_statuses
from forktrack_core.config import DEFAULT_CONFIG_TEMPLATE, ForktrackConfig, load_config
from forktrack_core.errors import ConfigNotFound, GitNotAvailable
from forktrack_core.git import GitRunner, SubprocessGitRunner
from forktrack_core.gitmodules import load_gitmodules
from forktrack_core.log import configure_logging
from forktrack_core.remotes import ReconcileOutcome, ReconcileResult, UpstreamReconciler
from forktrack_core.report import (
    BranchSummary,
    render_csv,
    render_json,
    render_reconcile_summary,
    render_summary,
    render_table,
)

app = typer.Typer(
    name="forktrack",
    help="Configure upstream remotes for submodules and report branch divergence.",
)

config_app = typer.Typer(help="Manage forktrack configuration.")
app.add_typer(config_app, name="config")

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

# Global state
_config: ForktrackConfig | None = None


class OutputFormat(str, Enum):
    table = "table"
    json = "json"
    csv = "csv"


def _get_config() -> ForktrackConfig:
    if _config is None:
        return load_config()
    return _config


def _make_runner(cfg: ForktrackConfig) -> GitRunner:
    return SubprocessGitRunner(executable=cfg.git.executable, timeout=cfg.git.timeout)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to forktrack.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


# ---------------------------------------------------------------------------
# forktrack setup
# ---------------------------------------------------------------------------

_OUTCOME_LINES = {
    ReconcileOutcome.already_configured: ("  ✓ Status:   Upstream already configured correctly", "green"),
    ReconcileOutcome.added: ("  ✓ Status:   Upstream remote added", "green"),
    ReconcileOutcome.updated: ("  ✓ Status:   Upstream remote updated", "green"),
    ReconcileOutcome.would_add: ("  [DRY RUN] Would add upstream remote", "dim"),
    ReconcileOutcome.would_update: ("    [DRY RUN] Would update remote", "dim"),
}


def _print_reconcile_result(result: ReconcileResult) -> None:
    if result.outcome is ReconcileOutcome.skipped and not (result.path and result.upstream):
        console.print(f"⚠ Skipping '{result.name}': {result.message}", style="yellow", markup=False)
        return

    console.print(f"Processing: {result.name}", style="cyan", markup=False)
    console.print(f"  Path:     {result.path}", markup=False)
    console.print(f"  Upstream: {result.upstream}", markup=False)

    if result.outcome is ReconcileOutcome.skipped:
        console.print(f"  ⚠ Skipping: {result.message}", style="yellow", markup=False)
    elif result.outcome is ReconcileOutcome.failed:
        console.print(f"  ✗ Error:    {result.message}", style="red", markup=False)
    else:
        if result.current_url and result.outcome is not ReconcileOutcome.already_configured:
            console.print("  ⚠ Warning:  Upstream remote exists with different URL", style="yellow")
            console.print(f"    Current:  {result.current_url}", style="yellow", markup=False)
            console.print(f"    Expected: {result.upstream}", style="yellow", markup=False)
        line, style = _OUTCOME_LINES[result.outcome]
        console.print(line, style=style, markup=False)
    console.print()


@app.command()
def setup(
    gitmodules: Annotated[
        str | None, typer.Argument(help="Path to the extended .gitmodules file")
    ] = None,
    dry_run: bool = typer.Option(False, "--dry-run", help="Report intended changes only"),
    remote: Annotated[
        str | None, typer.Option("--remote", help="Remote name to configure")
    ] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Add or fix the upstream remote of every submodule declaring one."""
    cfg = _get_config()
    if verbose:
        configure_logging("debug", cfg.log_format)

    gitmodules_path = Path(gitmodules or cfg.setup.gitmodules)
    try:
        entries = load_gitmodules(gitmodules_path)
    except ConfigNotFound as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"Reading .gitmodules from: {gitmodules_path}\n", markup=False)

    reconciler = UpstreamReconciler(
        _make_runner(cfg),
        base_dir=gitmodules_path.parent,
        remote_name=remote or cfg.setup.remote_name,
        dry_run=dry_run,
    )
    report = reconciler.reconcile(entries, on_result=_print_reconcile_result)
    if report.aborted:
        err_console.print(f"[red]Error:[/red] {escape(report.aborted)}")

    console.print("=" * 38)
    console.print(render_reconcile_summary(report.stats, dry_run=dry_run))

    if not report.ok:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# forktrack status
# ---------------------------------------------------------------------------


def _submodule_targets(gitmodules_path: Path) -> list[Path]:
    """Existing submodule directories from .gitmodules, in name order."""
    entries = load_gitmodules(gitmodules_path)
    targets: list[Path] = []
    for name in sorted(entries):
        workdir = entries[name].resolve_path(gitmodules_path.parent)
        if workdir is None:
            continue
        if not workdir.is_dir():
            err_console.print(f"[yellow]⚠ Submodule path not found: {escape(str(workdir))}[/yellow]")
            continue
        targets.append(workdir)
    return targets


@app.command()
def status(
    path: Annotated[str, typer.Argument(help="Repository to check")] = ".",
    remote: Annotated[
        str | None, typer.Option("--remote", help="Remote name to compare against")
    ] = None,
    pattern: Annotated[
        str | None, typer.Option("--pattern", help='Branch glob filter, e.g. "feature/*"')
    ] = None,
    all_submodules: bool = typer.Option(
        False, "--all-submodules", help="Check every submodule listed in .gitmodules"
    ),
    gitmodules: Annotated[
        str | None, typer.Option("--gitmodules", help="Path to .gitmodules")
    ] = None,
    format: Annotated[
        OutputFormat | None, typer.Option("--format", "-f", help="Output format")
    ] = None,
    jobs: Annotated[
        int | None, typer.Option("--jobs", "-j", min=1, help="Repositories checked in parallel")
    ] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show hashes and debug logging"),
) -> None:
    """Show how far each local branch is ahead of or behind its remote branch."""
    cfg = _get_config()
    if verbose:
        configure_logging("debug", cfg.log_format)

    remote_name = remote or cfg.status.remote
    fmt = format.value if format else cfg.status.format
    max_workers = jobs or cfg.status.max_workers

    if all_submodules:
        gitmodules_path = Path(gitmodules or cfg.setup.gitmodules)
        err_console.print("Processing all submodules...")
        try:
            targets = _submodule_targets(gitmodules_path)
        except ConfigNotFound as e:
            err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
    else:
        targets = [Path(path)]

    analyzer = BranchAnalyzer(
        _make_runner(cfg),
        remote=remote_name,
        pattern=pattern or cfg.status.pattern,
        head_remote=cfg.git.head_remote,
    )

    on_target = None
    if all_submodules:
        if max_workers > 1:
            err_console.print(f"Checking {len(targets)} repositories ({max_workers} workers)...")
        else:
            on_target = lambda p: err_console.print(f"Checking: {p.name}...", markup=False)  # noqa: E731

    try:
        collection = collect_statuses(
            targets, analyzer, max_workers=max_workers, on_target=on_target
        )
    except GitNotAvailable as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    for failed in collection.failed_targets:
        err_console.print(f"[red]Error:[/red] Not a git repository: {escape(str(failed))}")

    records = collection.records
    if fmt == "json":
        typer.echo(render_json(records, remote_name))
    elif fmt == "csv":
        typer.echo(render_csv(records))
    else:
        console.print(render_table(records, verbose=verbose))
        if records:
            console.print()
            console.print("=" * 60, style="dim")
            console.print(render_summary(BranchSummary.from_records(records)))

    if collection.failed_targets or not collection.all_tracked:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# forktrack config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default forktrack.yaml in current directory."""
    target = Path("forktrack.yaml")
    if target.exists() and not force:
        rprint("[yellow]forktrack.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
