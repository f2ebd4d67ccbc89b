"""init command: interactive setup wizard.

Writes .patchboard.yml with the Gerrit server, the CI account whose votes
are hidden from the reviewer column, the snapshot store and an optional
chat webhook. Existing keys in the file are preserved.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from urllib.parse import urlparse

import click
import yaml
from rich.console import Console

console = Console()

_CONFIG_FILENAME = ".patchboard.yml"


@click.command("init")
@click.option("--gerrit-url", default=None, help="Gerrit base URL. Auto-detected from the git remote.")
def init_cmd(gerrit_url: str | None):
    """Set up patchboard for a Gerrit server.

    Creates .patchboard.yml in the current directory.
    """
    console.print("\n[bold cyan]patchboard init[/bold cyan]: setup wizard\n")

    # --- Detect Gerrit from git remote ---
    if gerrit_url is None:
        detected = _detect_gerrit_from_git()
        if detected:
            console.print(f"[dim]Detected Gerrit server: {detected}[/dim]")
        gerrit_url = click.prompt("Gerrit base URL", default=detected)

    automation_account = click.prompt("CI account to hide from reviewers", default="jenkins")

    # --- Choose store backend ---
    console.print("\nSnapshot store:")
    console.print("  [bold]none[/bold]    no history (default)")
    console.print("  [bold]file[/bold]    latest batch plus dated JSON files in a directory")
    console.print("  [bold]sqlite[/bold]  one local SQLite file")
    store_type = click.prompt(
        "Store backend",
        type=click.Choice(["none", "file", "sqlite"]),
        default="none",
    )

    config: dict = {"gerrit_url": gerrit_url.rstrip("/"), "automation_account": automation_account}

    if store_type == "file":
        directory = click.prompt("Snapshot directory", default=".patchboard")
        config["store"] = "file"
        if directory != ".patchboard":
            config["store_path"] = directory
        console.print(f"[green]File store configured at {directory}[/green]")

    elif store_type == "sqlite":
        db_path = click.prompt("SQLite database path", default=".patchboard.db")
        config["store"] = "sqlite"
        if db_path != ".patchboard.db":
            config["store_path"] = db_path
        console.print(f"[green]SQLite store configured at {db_path}[/green]")

    # --- Optional webhook ---
    webhook_url = click.prompt("Chat webhook URL for `patchboard notify` (blank to skip)", default="", show_default=False)
    if webhook_url:
        config["webhook_url"] = webhook_url

    _write_config(config)
    console.print(f"[green]Created {_CONFIG_FILENAME}[/green]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Start the dashboard with: [bold]patchboard serve[/bold]")


def _detect_gerrit_from_git() -> str | None:
    """Guess the Gerrit web URL from the origin remote.

    https://review.example.org/a/project  →  https://review.example.org
    ssh://user@review.example.org:29418/p →  https://review.example.org
    """
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode != 0:
            return None
        url = result.stdout.strip()
        parsed = urlparse(url)
        if not parsed.hostname:
            return None
        # GitHub and GitLab remotes are not Gerrit servers.
        if parsed.hostname in ("github.com", "gitlab.com"):
            return None
        if parsed.scheme == "ssh" and parsed.port != 29418:
            return None
        return f"https://{parsed.hostname}"
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None


def _write_config(config: dict) -> None:
    """Write or update .patchboard.yml, preserving any existing keys."""
    path = Path(_CONFIG_FILENAME)
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))
