"""Cached source of raw open changes.

The feed is the only place that awaits: it fetches from Gerrit, hands the
batch to ``on_fetch`` (the CLI wires that to the snapshot store) and then
tells the report cache that new data arrived. Grid building happens
afterwards, synchronously, in ReportCache.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from patchboard_core.cache import ReportCache
    from patchboard_core.gerrit.client import GerritClient

logger = logging.getLogger(__name__)


class PatchFeed:
    def __init__(
        self,
        client: GerritClient,
        query: str = "is:open",
        ttl_seconds: float = 600,
        on_fetch: Callable[[str, list[dict]], None] | None = None,
        report_cache: ReportCache | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.query = query
        self.ttl_seconds = ttl_seconds
        self.on_fetch = on_fetch
        self.report_cache = report_cache
        self._clock = clock
        self._data: list[dict] | None = None
        self._fetched_at = 0.0
        self._generation = 0
        self._lock = asyncio.Lock()

    def _fresh(self) -> bool:
        if self._data is None:
            return False
        return not self.ttl_seconds or self._clock() - self._fetched_at < self.ttl_seconds

    async def get(self, force_refresh: bool = False) -> list[dict]:
        """Return the current batch, fetching when stale or when ``force_refresh`` is set.

        Callers that arrive while a fetch is in flight wait for it and reuse
        its result instead of fetching again.
        """
        if self._fresh() and not force_refresh:
            logger.debug("Returning cached change data")
            return self._data

        generation = self._generation
        async with self._lock:
            # Another caller refreshed while we waited on the lock.
            if self._generation != generation and self._data is not None:
                return self._data

            logger.debug("Fetching change data (force_refresh=%s)", force_refresh)
            data = await self.client.fetch_changes(self.query)
            self._save_snapshot(data)
            self._data = data
            self._fetched_at = self._clock()
            self._generation += 1
            if self.report_cache is not None:
                self.report_cache.invalidate()
            return data

    def _save_snapshot(self, data: list[dict]) -> None:
        if self.on_fetch is None:
            return
        try:
            self.on_fetch(self.query, data)
        except Exception as e:
            # History is a side channel; the dashboard still serves fresh data.
            logger.warning("Saving snapshot of %d change(s) failed: %s", len(data), e)
