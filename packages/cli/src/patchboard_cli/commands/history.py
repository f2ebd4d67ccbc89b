"""history command: list stored snapshots of fetched data."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.command("history")
@click.option("--limit", default=20, show_default=True, help="Maximum number of snapshots to show.")
@click.pass_context
def history_cmd(ctx, limit: int):
    """Show the snapshots recorded by previous fetches, newest first.

    Reads from the configured store (file or SQLite). Run `patchboard init`
    to set up a store if you haven't already.
    """
    from patchboard_store.noop import NoOpStore

    store = ctx.obj.get("store") if ctx.obj else None
    if store is None or isinstance(store, NoOpStore):
        raise click.UsageError(
            "No store configured. Add 'store: file' or 'store: sqlite' to .patchboard.yml, "
            "or run `patchboard init` to set one up."
        )

    snapshots = store.list_snapshots(limit=limit)
    if not snapshots:
        console.print("[yellow]No snapshots found.[/yellow]")
        return

    table = Table(title="Snapshot history", show_header=True, header_style="bold cyan")
    table.add_column("Taken At", width=20)
    table.add_column("Query")
    table.add_column("Changes", justify="right", width=8)
    table.add_column("WIP", justify="right", width=6)

    for s in snapshots:
        wip = sum(1 for c in s.changes if isinstance(c, dict) and c.get("work_in_progress"))
        table.add_row(
            s.taken_at[:19].replace("T", " "),
            s.query,
            str(s.change_count),
            str(wip),
        )

    console.print(table)
