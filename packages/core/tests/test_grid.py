"""Tests for the bucket grid and its index mapping."""

import pytest

from patchboard_core.grid import (
    INVALID_REVIEW_INDEX,
    INVALID_VERIFICATION_INDEX,
    BucketGrid,
    review_index,
    verification_index,
)
from patchboard_core.scores import NO_DATA, PLUS_ONE, PLUS_TWO, Score


class TestIndexMapping:
    @pytest.mark.parametrize(
        "score, expected",
        [
            (Score.of(-1), 0),
            (Score.of(0), 1),
            (Score.of(1), 2),
            (PLUS_ONE, 2),
            (NO_DATA, INVALID_VERIFICATION_INDEX),
            (Score.of(-2), INVALID_VERIFICATION_INDEX),
            (PLUS_TWO, INVALID_VERIFICATION_INDEX),
        ],
    )
    def test_verification_index(self, score, expected):
        assert verification_index(score) == expected

    @pytest.mark.parametrize(
        "score, expected",
        [
            (Score.of(-2), 0),
            (Score.of(-1), 1),
            (Score.of(0), 2),
            (Score.of(1), 3),
            (PLUS_ONE, 3),
            (Score.of(2), 4),
            (PLUS_TWO, 4),
            (NO_DATA, INVALID_REVIEW_INDEX),
            (Score.of(7), INVALID_REVIEW_INDEX),
        ],
    )
    def test_review_index(self, score, expected):
        assert review_index(score) == expected


class TestBucketGrid:
    def test_starts_empty_with_fixed_shape(self):
        grid = BucketGrid()
        assert grid.wip == []
        assert len(grid.cells) == 4
        assert all(len(row) == 6 for row in grid.cells)
        assert grid.total() == 0

    def test_wip_goes_to_wip_list_only(self):
        grid = BucketGrid()
        grid.append(PLUS_ONE, PLUS_TWO, "row", is_wip=True)
        assert grid.wip == ["row"]
        assert sum(map(sum, grid.counts())) == 0

    def test_append_lands_in_indexed_cell(self):
        grid = BucketGrid()
        grid.append(PLUS_ONE, Score.of(-1), "row")
        assert grid.cell(2, 1) == ["row"]

    def test_unknown_scores_land_in_invalid_corner(self):
        grid = BucketGrid()
        grid.append(NO_DATA, NO_DATA, "row")
        assert grid.cell(INVALID_VERIFICATION_INDEX, INVALID_REVIEW_INDEX) == ["row"]

    def test_insertion_order_kept(self):
        grid = BucketGrid()
        for name in ("a", "b", "c"):
            grid.append(Score.of(0), Score.of(0), name)
        assert grid.cell(1, 2) == ["a", "b", "c"]

    def test_every_append_counted_once(self):
        scores = [NO_DATA, PLUS_ONE, PLUS_TWO, Score.of(-2), Score.of(-1), Score.of(0), Score.of(1), Score.of(9)]
        grid = BucketGrid()
        n = 0
        for v in scores:
            for cr in scores:
                for wip in (False, True):
                    grid.append(v, cr, f"{v}/{cr}/{wip}", is_wip=wip)
                    n += 1
        assert grid.total() == n

    def test_reset_clears_everything(self):
        grid = BucketGrid()
        grid.append(PLUS_ONE, PLUS_ONE, "row")
        grid.append(PLUS_ONE, PLUS_ONE, "wip", is_wip=True)
        grid.reset()
        assert grid.total() == 0
        assert grid.wip == []
