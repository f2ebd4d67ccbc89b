"""report command: render the dashboard page once."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from patchboard_cli.runtime import build_dashboard, run

console = Console(stderr=True)


def render_page(title: str, report) -> str:
    """Render the same page the web dashboard serves at ``/``."""
    from patchboard_cli.web.app import templates

    template = templates.get_template("dashboard.html")
    return template.render(
        title=title,
        built_at=report.built_at,
        body=report.body,
        patch_count=report.patch_count,
        unlisted_count=report.unlisted_count,
    )


@click.command("report")
@click.option(
    "--output",
    "-o",
    "output_path",
    default=None,
    type=click.Path(dir_okay=False, writable=True),
    help="Write the HTML page here instead of stdout.",
)
@click.pass_context
def report_cmd(ctx, output_path: str | None):
    """Fetch open changes and render the grouped HTML report."""
    from patchboard_core.errors import GerritFetchError, ReportUnavailableError

    dashboard = build_dashboard(ctx)
    try:
        report = run(dashboard.report())
    except (GerritFetchError, ReportUnavailableError) as e:
        raise click.ClickException(str(e)) from e

    page = render_page(dashboard.title, report)
    if output_path is None:
        click.echo(page)
        return
    Path(output_path).write_text(page)
    console.print(f"[green]Wrote report of {report.patch_count} change(s) to {output_path}[/green]")
