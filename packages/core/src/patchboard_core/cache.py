"""Process-wide memoised report.

The cache owns the grid of its last successful build. A build fills a fresh
grid from the batch and, only if that succeeds, swaps the grid and a new
immutable CachedReport in together. The build is one synchronous call, so
under the asyncio model every reader sees either the previous report and
grid or the new ones, never a mix and never a partial grid.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from patchboard_core.errors import ReportUnavailableError
from patchboard_core.grid import BucketGrid
from patchboard_core.models import Patch
from patchboard_core.pipeline import populate
from patchboard_core.report import CrossTabRow, GridSummary, cross_tab, render_body, summary, unlisted_count
from patchboard_core.reviewers import DEFAULT_AUTOMATION_ACCOUNT

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 600


@dataclass(frozen=True)
class CachedReport:
    body: str
    built_at: datetime
    patch_count: int
    # Changes counted in the grid but outside every listed group
    # (verified, failed or unverified with no review data).
    unlisted_count: int = 0


class ReportCache:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        gerrit_url: str = "",
        automation_account: str = DEFAULT_AUTOMATION_ACCOUNT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.gerrit_url = gerrit_url
        self.automation_account = automation_account
        self.grid = BucketGrid()
        self._clock = clock
        self._report: CachedReport | None = None
        self._valid = False
        self._stored_at = 0.0

    @property
    def report(self) -> CachedReport | None:
        """The cached report if it is still fresh, else None."""
        if self._report is None or not self._valid:
            return None
        if self.ttl_seconds and self._clock() - self._stored_at >= self.ttl_seconds:
            return None
        return self._report

    def invalidate(self) -> None:
        """Drop the cached report; the next get_or_build rebuilds."""
        if self._valid:
            logger.debug("Report cache invalidated")
        self._valid = False

    def get_or_build(self, patches: Iterable[dict | Patch], force_refresh: bool = False) -> CachedReport:
        """Return the cached report, rebuilding from ``patches`` when stale or forced.

        Raises:
            ReportUnavailableError: the build failed. The previous report and
                grid stay in place.
        """
        cached = self.report
        if cached is not None and not force_refresh:
            return cached

        grid = BucketGrid()
        try:
            count = populate(
                patches,
                grid,
                gerrit_url=self.gerrit_url,
                automation_account=self.automation_account,
            )
        except Exception as e:
            logger.error("Report build failed; keeping the previous report: %s", e)
            raise ReportUnavailableError(f"report build failed: {e}") from e
        if grid.total() != count:
            raise ReportUnavailableError(f"grid holds {grid.total()} row(s) after bucketing {count} change(s)")

        self.grid = grid
        self._report = CachedReport(
            body=render_body(grid),
            built_at=datetime.now(timezone.utc),
            patch_count=count,
            unlisted_count=unlisted_count(grid),
        )
        self._valid = True
        self._stored_at = self._clock()
        logger.info("Built report from %d change(s)", count)
        return self._report

    def cross_tab(self) -> list[CrossTabRow]:
        self._require_build()
        return cross_tab(self.grid)

    def summary(self) -> GridSummary:
        self._require_build()
        return summary(self.grid)

    def _require_build(self) -> None:
        if self._report is None:
            raise ReportUnavailableError("no report has been built yet")
