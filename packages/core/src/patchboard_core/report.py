"""Read paths over a populated grid: the flattened report and the statistics.

The flattened report puts verified changes first (closest to merge at the
top), then work in progress, then unverified, failed and unknown ones.
Statistics read bucket sizes straight off the same grid.
"""

from __future__ import annotations

from dataclasses import dataclass

from patchboard_core.grid import (
    INVALID_REVIEW_INDEX,
    INVALID_VERIFICATION_INDEX,
    REVIEW_LABELS,
    VERIFICATION_LABELS,
    BucketGrid,
    review_index,
    verification_index,
)
from patchboard_core.scores import NO_DATA, Score

_REVIEW_ORDER = [review_index(Score.of(value)) for value in (2, 1, 0, -1, -2)]
_VERIFIED = verification_index(Score.of(1))
_NOT_VERIFIED = verification_index(Score.of(0))
_FAILED = verification_index(Score.of(-1))
_UNKNOWN = verification_index(NO_DATA)


def group_order() -> list[tuple[int, int] | str]:
    """Sequence of groups the report is built from: grid coordinates, or ``"wip"``."""
    order: list[tuple[int, int] | str] = [(_VERIFIED, cr) for cr in _REVIEW_ORDER]
    order.append("wip")
    for v_index in (_NOT_VERIFIED, _FAILED, _UNKNOWN):
        order.extend((v_index, cr) for cr in _REVIEW_ORDER)
    order.append((INVALID_VERIFICATION_INDEX, INVALID_REVIEW_INDEX))
    return order


def flatten(grid: BucketGrid) -> list[str]:
    rows: list[str] = []
    for group in group_order():
        if group == "wip":
            rows.extend(grid.wip)
        else:
            rows.extend(grid.cell(*group))
    return rows


def render_body(grid: BucketGrid) -> str:
    return "".join(flatten(grid))


def unlisted_count(grid: BucketGrid) -> int:
    """Rows held by the grid that no listed group covers, e.g. V+1 with no review data."""
    return grid.total() - len(flatten(grid))


@dataclass(frozen=True)
class CrossTabRow:
    label: str
    counts: tuple[int, ...]

    @property
    def total(self) -> int:
        return sum(self.counts)


@dataclass(frozen=True)
class GridSummary:
    rows: tuple[CrossTabRow, ...]
    wip: int

    @property
    def total(self) -> int:
        return self.wip + sum(row.total for row in self.rows)

    def to_dict(self) -> dict:
        return {
            "columns": list(REVIEW_LABELS),
            "rows": [{"verified": row.label, "counts": list(row.counts)} for row in self.rows],
            "wip": self.wip,
            "total": self.total,
        }


def cross_tab(grid: BucketGrid) -> list[CrossTabRow]:
    """One row per verification index, one count per review index."""
    return [
        CrossTabRow(label=VERIFICATION_LABELS[v_index], counts=tuple(counts))
        for v_index, counts in enumerate(grid.counts())
    ]


def summary(grid: BucketGrid) -> GridSummary:
    return GridSummary(rows=tuple(cross_tab(grid)), wip=len(grid.wip))


def format_summary(grid_summary: GridSummary) -> str:
    """Fixed-width text table of the summary, for chat notifications and terminals."""
    width = 4
    header = "V\\CR".ljust(width) + "".join(label.rjust(width) for label in REVIEW_LABELS)
    lines = [header]
    for row in grid_summary.rows:
        lines.append(row.label.ljust(width) + "".join(str(count).rjust(width) for count in row.counts))
    lines.append(f"WIP: {grid_summary.wip}")
    return "\n".join(lines)
