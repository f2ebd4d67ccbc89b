"""stats command: verification x review cross-tab of open changes."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from patchboard_cli.runtime import build_dashboard, run

console = Console()


def build_table(grid_summary) -> Table:
    from patchboard_core.grid import REVIEW_LABELS

    table = Table(title="Open changes by Verified (rows) and Code-Review (columns)", show_header=True)
    table.add_column("V \\ CR", style="bold")
    for label in REVIEW_LABELS:
        table.add_column(label, justify="right")
    table.add_column("Total", justify="right", style="bold")

    for row in grid_summary.rows:
        table.add_row(row.label, *(str(count) for count in row.counts), str(row.total))
    return table


@click.command("stats")
@click.pass_context
def stats_cmd(ctx):
    """Show how open changes are distributed over the report buckets.

    Counts come straight from the bucket sizes of the same build the HTML
    report uses; "?" collects missing or unrecognised scores.
    """
    from patchboard_core.errors import GerritFetchError, ReportUnavailableError

    dashboard = build_dashboard(ctx)
    try:
        grid_summary = run(dashboard.summary())
    except (GerritFetchError, ReportUnavailableError) as e:
        raise click.ClickException(str(e)) from e

    if grid_summary.total == 0:
        console.print("[yellow]No open changes found.[/yellow]")
        return

    console.print(build_table(grid_summary))
    console.print(f"  Work in progress: {grid_summary.wip}")
    console.print(f"  Total changes:    {grid_summary.total}")
