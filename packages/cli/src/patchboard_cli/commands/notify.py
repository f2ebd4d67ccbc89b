"""notify command: push the bucket distribution to a chat webhook."""

from __future__ import annotations

import click
from rich.console import Console

from patchboard_cli.runtime import build_dashboard, run

console = Console()


@click.command("notify")
@click.option("--webhook-url", default=None, help="Incoming-webhook URL. Overrides config file.")
@click.option("--dry-run", "-n", is_flag=True, help="Print the summary instead of posting it.")
@click.pass_context
def notify_cmd(ctx, webhook_url: str | None, dry_run: bool):
    """Post a fixed-width summary of the open-change distribution.

    Intended for cron: one message per run, no state kept between runs.
    """
    from patchboard_core.errors import GerritFetchError, NotificationError, ReportUnavailableError
    from patchboard_core.notify import WebhookNotifier, build_payload

    config = ctx.obj["config"]
    webhook_url = webhook_url or config.get("webhook_url")
    if not webhook_url and not dry_run:
        raise click.UsageError(
            "No webhook configured. Set webhook_url in .patchboard.yml, export PATCHBOARD_WEBHOOK_URL, "
            "or pass --dry-run."
        )

    dashboard = build_dashboard(ctx)
    try:
        grid_summary = run(dashboard.summary())
    except (GerritFetchError, ReportUnavailableError) as e:
        raise click.ClickException(str(e)) from e

    if dry_run:
        click.echo(build_payload(grid_summary, dashboard.title)["text"])
        return

    notifier = WebhookNotifier(webhook_url, timeout=config.get("request_timeout", 30))
    try:
        run(notifier.send(grid_summary, dashboard.title))
    except NotificationError as e:
        raise click.ClickException(str(e)) from e
    console.print(f"[green]Posted summary of {grid_summary.total} change(s).[/green]")
