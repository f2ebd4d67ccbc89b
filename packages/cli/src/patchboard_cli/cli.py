"""CLI entry point for patchboard.

Commands:
  serve    run the web dashboard
  report   render the dashboard page once, to a file or stdout
  stats    print the verification x review cross-tab
  notify   push the cross-tab summary to a chat webhook
  history  list stored snapshots of fetched data
  init     interactive setup wizard
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from patchboard_cli.commands.history import history_cmd
from patchboard_cli.commands.init import init_cmd
from patchboard_cli.commands.notify import notify_cmd
from patchboard_cli.commands.report import report_cmd
from patchboard_cli.commands.serve import serve_cmd
from patchboard_cli.commands.stats import stats_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured snapshot store from .patchboard.yml settings.

    Store selection hierarchy:
      store: file   → FileSnapshotStore (store_path or .patchboard/)
      store: sqlite → SQLiteStore (store_path or .patchboard.db)
      (default)     → NoOpStore  (no history)

    This factory lives in cli.py so neither patchboard_core nor
    patchboard_store know about the CLI config format.
    """
    from patchboard_store.noop import NoOpStore

    store_type = config.get("store", "noop")

    if store_type == "file":
        from patchboard_store.file import FileSnapshotStore

        return FileSnapshotStore(directory=config.get("store_path", ".patchboard"))

    if store_type == "sqlite":
        from patchboard_store.sqlite import SQLiteStore

        db_path = config.get("store_path", ".patchboard.db")
        return SQLiteStore(db_path=db_path)

    if store_type not in (None, "noop", "none"):
        console.print(f"[yellow]Unknown store {store_type!r}. Falling back to no store.[/yellow]")
    return NoOpStore()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("patchboard"),
    prog_name="patchboard",
)
@click.option(
    "--config",
    "config_path",
    default=".patchboard.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PATCHBOARD_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log per-change diagnostics.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Gerrit review dashboard: open changes grouped by verification and review state."""
    from patchboard_core.config import load_config

    ctx.ensure_object(dict)
    _setup_logging(verbose)

    config = load_config(config_path)
    store = _build_store(config)
    ctx.obj["store"] = store
    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path
    ctx.call_on_close(store.close)


main.add_command(serve_cmd)
main.add_command(report_cmd)
main.add_command(stats_cmd)
main.add_command(notify_cmd)
main.add_command(history_cmd)
main.add_command(init_cmd)
