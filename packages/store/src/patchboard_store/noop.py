"""No-op store: the default when no store is configured.

Using a NoOpStore rather than None lets the CLI always hand the feed a
snapshot writer without conditional checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from patchboard_store.base import BaseSnapshotStore

if TYPE_CHECKING:
    from patchboard_store.models import Snapshot


class NoOpStore(BaseSnapshotStore):
    """Silently discards all snapshots; zero configuration required."""

    def save(self, snapshot: Snapshot) -> None:
        pass  # intentional no-op

    def list_snapshots(self, limit: int | None = None) -> list[Snapshot]:
        return []
