"""The bucket grid that rendered rows are sorted into.

Layout (rows = verification index, columns = review index):

    V -1      : CR -2, CR -1, CR 0, CR +1, CR +2, CR ?
    V  0      : CR -2, CR -1, CR 0, CR +1, CR +2, CR ?
    V +1      : CR -2, CR -1, CR 0, CR +1, CR +2, CR ?
    V ?       : CR -2, CR -1, CR 0, CR +1, CR +2, CR ?

plus a separate list for work-in-progress patches, whatever their scores.
"?" is the catch-all for NO_DATA and any value outside the expected range.
"""

from __future__ import annotations

import logging

from patchboard_core.scores import Score

logger = logging.getLogger(__name__)

VERIFICATION_SLOTS = 4
REVIEW_SLOTS = 6
INVALID_VERIFICATION_INDEX = VERIFICATION_SLOTS - 1
INVALID_REVIEW_INDEX = REVIEW_SLOTS - 1

_VERIFICATION_INDEX = {-1: 0, 0: 1, 1: 2}
_REVIEW_INDEX = {-2: 0, -1: 1, 0: 2, 1: 3, 2: 4}

# Inverse mappings used for labelling statistics.
VERIFICATION_LABELS = ("-1", "0", "+1", "?")
REVIEW_LABELS = ("-2", "-1", "0", "+1", "+2", "?")


def verification_index(score: Score) -> int:
    """Row of the grid for a verification score. Total: unknown values map to the last row."""
    if not score.is_no_data and score.numeric in _VERIFICATION_INDEX:
        return _VERIFICATION_INDEX[score.numeric]
    logger.debug("verification_index(%s): unrecognized verification score", score)
    return INVALID_VERIFICATION_INDEX


def review_index(score: Score) -> int:
    """Column of the grid for a review score. Total: unknown values map to the last column."""
    if not score.is_no_data and score.numeric in _REVIEW_INDEX:
        return _REVIEW_INDEX[score.numeric]
    logger.debug("review_index(%s): unrecognized review score", score)
    return INVALID_REVIEW_INDEX


class BucketGrid:
    """Work-in-progress list plus the 4x6 matrix of row lists."""

    def __init__(self) -> None:
        self.wip: list[str] = []
        self.cells: list[list[list[str]]] = []
        self.reset()

    def reset(self) -> None:
        self.wip = []
        self.cells = [[[] for _ in range(REVIEW_SLOTS)] for _ in range(VERIFICATION_SLOTS)]

    def append(self, v_score: Score, cr_score: Score, row: str, is_wip: bool = False) -> None:
        if is_wip:
            self.wip.append(row)
            return
        v_index = verification_index(v_score)
        cr_index = review_index(cr_score)
        logger.debug("grid[%d][%d] <- row", v_index, cr_index)
        self.cells[v_index][cr_index].append(row)

    def cell(self, v_index: int, cr_index: int) -> list[str]:
        return self.cells[v_index][cr_index]

    def counts(self) -> list[list[int]]:
        """Bucket sizes, indexed like ``cells``."""
        return [[len(bucket) for bucket in row] for row in self.cells]

    def total(self) -> int:
        """Number of rows held, WIP included."""
        return len(self.wip) + sum(sum(row) for row in self.counts())
