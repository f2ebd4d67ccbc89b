"""FileSnapshotStore: plain JSON files on disk.

Layout under the store directory:
  open.json: the latest batch, overwritten on every save
  history/<YYYYmmddTHHMMSSffffffZ>.json: one dated file per save, never rewritten

The latest file is what other tools read for "current state"; the history
directory is the raw archive. Nothing here aggregates across snapshots.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from patchboard_store.base import BaseSnapshotStore
from patchboard_store.models import Snapshot

logger = logging.getLogger(__name__)

_LATEST_FILENAME = "open.json"
_HISTORY_DIRNAME = "history"


class FileSnapshotStore(BaseSnapshotStore):
    """Stores snapshots as JSON documents in a directory.

    The directory defaults to `.patchboard` in the current working
    directory. Configure via .patchboard.yml: `store_path: /path/to/dir`.
    """

    def __init__(self, directory: str = ".patchboard"):
        self._dir = Path(directory)
        self._history = self._dir / _HISTORY_DIRNAME
        self._history.mkdir(parents=True, exist_ok=True)

    @property
    def latest_path(self) -> Path:
        return self._dir / _LATEST_FILENAME

    def save(self, snapshot: Snapshot) -> None:
        content = json.dumps(self._to_dict(snapshot))
        self.latest_path.write_text(content)
        dated = self._history / f"{self._stamp(snapshot.taken_at)}.json"
        dated.write_text(content)
        logger.debug("Saved snapshot of %d change(s) to %s", snapshot.change_count, dated)

    def list_snapshots(self, limit: int | None = None) -> list[Snapshot]:
        paths = sorted(self._history.glob("*.json"), reverse=True)
        if limit is not None:
            paths = paths[:limit]

        results = []
        for path in paths:
            try:
                results.append(self._from_dict(json.loads(path.read_text())))
            except (OSError, json.JSONDecodeError, AttributeError) as e:
                logger.warning("Skipping unreadable snapshot %s: %s", path.name, e)
        return results

    @staticmethod
    def _stamp(taken_at: str) -> str:
        try:
            return datetime.fromisoformat(taken_at).strftime("%Y%m%dT%H%M%S%fZ")
        except ValueError:
            return "".join(ch for ch in taken_at if ch.isalnum())

    @staticmethod
    def _to_dict(snapshot: Snapshot) -> dict:
        return {
            "taken_at": snapshot.taken_at,
            "query": snapshot.query,
            "changes": snapshot.changes,
        }

    @staticmethod
    def _from_dict(d: dict) -> Snapshot:
        return Snapshot(
            taken_at=d.get("taken_at", ""),
            query=d.get("query", ""),
            changes=d.get("changes") or [],
        )
