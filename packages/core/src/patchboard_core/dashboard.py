"""Feed + report cache wired together; the one object the web app and CLI talk to."""

from __future__ import annotations

import logging
from collections.abc import Callable

from patchboard_core.cache import CachedReport, ReportCache
from patchboard_core.feed import PatchFeed
from patchboard_core.gerrit.client import GerritClient
from patchboard_core.report import CrossTabRow, GridSummary

logger = logging.getLogger(__name__)


class Dashboard:
    def __init__(self, feed: PatchFeed, cache: ReportCache, title: str = "Gerrit Report"):
        self.feed = feed
        self.cache = cache
        self.title = title
        feed.report_cache = cache

    @classmethod
    def from_config(
        cls,
        config: dict,
        on_fetch: Callable[[str, list[dict]], None] | None = None,
        client: GerritClient | None = None,
    ) -> Dashboard:
        client = client or GerritClient.from_config(config)
        cache = ReportCache(
            ttl_seconds=config.get("report_ttl_seconds", 600),
            gerrit_url=client.base_url,
            automation_account=config.get("automation_account", "jenkins"),
        )
        feed = PatchFeed(
            client,
            query=config.get("query", "is:open"),
            ttl_seconds=config.get("data_ttl_seconds", 600),
            on_fetch=on_fetch,
        )
        return cls(feed, cache, title=config.get("title", "Gerrit Report"))

    async def report(self, force_refresh: bool = False) -> CachedReport:
        """Fetch if needed, then return the (possibly rebuilt) report.

        ``force_refresh`` forces the fetch, not the build: a new batch
        invalidates the cache, so the first caller after it rebuilds and any
        caller that shared the same fetch gets that report back. The await
        happens before the grid is touched; get_or_build runs to completion
        without yielding.
        """
        data = await self.feed.get(force_refresh=force_refresh)
        return self.cache.get_or_build(data)

    async def cross_tab(self, force_refresh: bool = False) -> list[CrossTabRow]:
        await self.report(force_refresh=force_refresh)
        return self.cache.cross_tab()

    async def summary(self, force_refresh: bool = False) -> GridSummary:
        await self.report(force_refresh=force_refresh)
        return self.cache.summary()
