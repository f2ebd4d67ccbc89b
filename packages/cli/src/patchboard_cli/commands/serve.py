"""serve command: run the web dashboard."""

from __future__ import annotations

import click
from rich.console import Console

from patchboard_cli.runtime import build_dashboard

console = Console()


@click.command("serve")
@click.option("--host", default=None, help="Interface to bind. Overrides config file.")
@click.option("--port", type=int, default=None, help="Port to listen on. Overrides config file.")
@click.pass_context
def serve_cmd(ctx, host: str | None, port: int | None):
    """Serve the dashboard over HTTP.

    Data is fetched lazily on the first request and cached for
    data_ttl_seconds; append ?refresh=1 to any page to force a refetch.
    """
    import uvicorn

    from patchboard_cli.web.app import create_app

    config = ctx.obj["config"]
    dashboard = build_dashboard(ctx)
    host = host or config.get("host", "127.0.0.1")
    port = port or config.get("port", 3000)

    console.print(f"App listening at [bold]http://{host}:{port}[/bold]")
    uvicorn.run(create_app(dashboard), host=host, port=port, log_config=None)
