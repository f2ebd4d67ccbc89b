"""Glue between the CLI context and patchboard_core.

The CLI layer owns the mapping from a fetched batch to a store Snapshot.
patchboard_core has no store knowledge and patchboard_store has no core
knowledge. The CLI bridges the two.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import click

from patchboard_core.dashboard import Dashboard
from patchboard_store.models import Snapshot

if TYPE_CHECKING:
    from patchboard_store.base import BaseSnapshotStore


def snapshot_writer(store: BaseSnapshotStore) -> Callable[[str, list[dict]], None]:
    def write(query: str, changes: list[dict]) -> None:
        store.save(
            Snapshot(
                taken_at=datetime.now(timezone.utc).isoformat(),
                query=query,
                changes=changes,
            )
        )

    return write


def build_dashboard(ctx: click.Context) -> Dashboard:
    """Create the Dashboard for this invocation from ``ctx.obj``.

    Raises click.UsageError when no Gerrit URL is configured.
    """
    obj = ctx.obj or {}
    config = obj.get("config") or {}
    if not config.get("gerrit_url"):
        raise click.UsageError("No Gerrit URL configured. Set gerrit_url in .patchboard.yml or export GERRIT_URL.")
    store = obj.get("store")
    on_fetch = snapshot_writer(store) if store is not None else None
    return Dashboard.from_config(config, on_fetch=on_fetch)


def run(coro):
    """Run one coroutine to completion from synchronous click code."""
    return asyncio.run(coro)
