"""Abstract store interface.

Every snapshot backend (JSON files, SQLite) implements this interface. The
CLI depends on BaseSnapshotStore, not on a concrete backend, so backends
are swappable without touching CLI code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from patchboard_store.models import Snapshot


class BaseSnapshotStore(ABC):
    """Pluggable persistence layer for fetched change batches."""

    @abstractmethod
    def save(self, snapshot: Snapshot) -> None:
        """Persist one fetched batch."""

    @abstractmethod
    def list_snapshots(self, limit: int | None = None) -> list[Snapshot]:
        """Return stored snapshots, newest first, at most ``limit`` of them.

        Returns an empty list if nothing is stored and never raises.
        """

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Optional. Subclasses that need cleanup should override this.
        Default is a no-op so callers can always call close() safely.
        """
