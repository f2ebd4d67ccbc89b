"""Snapshot data model.

Decoupled from patchboard_core so the store layer can be used independently
and patchboard_core has no knowledge of persistence concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Snapshot:
    """One raw batch of changes as fetched from Gerrit.

    ``changes`` holds the ChangeInfo dicts exactly as parsed, so a snapshot
    can be replayed through the report pipeline later.
    """

    taken_at: str  # ISO-8601 UTC timestamp
    query: str
    changes: list[dict] = field(default_factory=list)

    @property
    def change_count(self) -> int:
        return len(self.changes)
