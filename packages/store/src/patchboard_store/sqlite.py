"""SQLiteStore: snapshots in a single local database file.

Why SQLite next to the JSON-file store:
- Batteries included: ships with Python, no extra dependencies.
- One file instead of a growing directory of dated documents.
- Indexed on taken_at, so listing the newest snapshots stays cheap.

Schema:
  snapshots: one row per fetched batch; the changes are kept as the raw
              JSON array so a snapshot can be replayed unchanged.
"""

from __future__ import annotations

import json
import logging
import sqlite3

from patchboard_store.base import BaseSnapshotStore
from patchboard_store.models import Snapshot

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS snapshots (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    taken_at      TEXT NOT NULL,
    query         TEXT,
    change_count  INTEGER DEFAULT 0,
    changes_json  TEXT DEFAULT '[]'
);
CREATE INDEX IF NOT EXISTS idx_snapshots_taken_at ON snapshots (taken_at);
"""


class SQLiteStore(BaseSnapshotStore):
    """Stores snapshots in a local SQLite database file.

    The database file path defaults to `.patchboard.db` in the current working
    directory. Configure via .patchboard.yml: `store_path: /path/to/patchboard.db`.
    """

    def __init__(self, db_path: str = ".patchboard.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def save(self, snapshot: Snapshot) -> None:
        self._conn.execute(
            """
            INSERT INTO snapshots (taken_at, query, change_count, changes_json)
            VALUES (?, ?, ?, ?)
            """,
            (
                snapshot.taken_at,
                snapshot.query,
                snapshot.change_count,
                json.dumps(snapshot.changes),
            ),
        )
        self._conn.commit()

    def list_snapshots(self, limit: int | None = None) -> list[Snapshot]:
        sql = "SELECT * FROM snapshots ORDER BY taken_at DESC, id DESC"
        if limit is not None:
            rows = self._conn.execute(sql + " LIMIT ?", (limit,)).fetchall()
        else:
            rows = self._conn.execute(sql).fetchall()
        return [self._row_to_snapshot(r) for r in rows]

    def close(self) -> None:
        self._conn.close()

    @staticmethod
    def _row_to_snapshot(row: sqlite3.Row) -> Snapshot:
        return Snapshot(
            taken_at=row["taken_at"],
            query=row["query"] or "",
            changes=json.loads(row["changes_json"] or "[]"),
        )
