"""Tests for report flattening, cross-tab statistics and the notification summary."""

from patchboard_core.grid import BucketGrid
from patchboard_core.report import cross_tab, flatten, format_summary, group_order, render_body, summary, unlisted_count
from patchboard_core.scores import NO_DATA, PLUS_ONE, PLUS_TWO, Score

_REVIEW_SEQUENCE = [("+2", PLUS_TWO), ("+1", PLUS_ONE), ("0", Score.of(0)), ("-1", Score.of(-1)), ("-2", Score.of(-2))]
_VERIFICATION = {"+1": PLUS_ONE, "0": Score.of(0), "-1": Score.of(-1), "?": NO_DATA}


def _tagged_grid():
    """One row per presentation group, appended in scrambled order."""
    grid = BucketGrid()
    for v_label in ("?", "-1", "0", "+1"):
        for cr_label, cr_score in reversed(_REVIEW_SEQUENCE):
            grid.append(_VERIFICATION[v_label], cr_score, f"V{v_label}/CR{cr_label}")
    grid.append(NO_DATA, NO_DATA, "V?/CR?")
    grid.append(Score.of(0), Score.of(0), "WIP", is_wip=True)
    return grid


class TestFlatten:
    def test_exact_group_sequence(self):
        expected = [f"V+1/CR{cr}" for cr, _ in _REVIEW_SEQUENCE]
        expected.append("WIP")
        for v_label in ("0", "-1", "?"):
            expected.extend(f"V{v_label}/CR{cr}" for cr, _ in _REVIEW_SEQUENCE)
        expected.append("V?/CR?")

        assert flatten(_tagged_grid()) == expected

    def test_group_order_has_twenty_two_groups(self):
        order = group_order()
        assert len(order) == 22
        assert order[5] == "wip"
        assert order[-1] == (3, 5)

    def test_rows_within_group_keep_insertion_order(self):
        grid = BucketGrid()
        grid.append(PLUS_ONE, PLUS_TWO, "first")
        grid.append(PLUS_ONE, PLUS_TWO, "second")
        assert flatten(grid) == ["first", "second"]

    def test_render_body_joins_without_separator(self):
        grid = BucketGrid()
        grid.append(PLUS_ONE, PLUS_TWO, "<tr>a</tr>")
        grid.append(Score.of(0), PLUS_TWO, "<tr>b</tr>")
        assert render_body(grid) == "<tr>a</tr><tr>b</tr>"

    def test_empty_grid(self):
        assert render_body(BucketGrid()) == ""

    def test_unlisted_count(self):
        grid = BucketGrid()
        grid.append(PLUS_ONE, NO_DATA, "hidden")
        grid.append(Score.of(-1), NO_DATA, "hidden too")
        grid.append(NO_DATA, NO_DATA, "shown")
        grid.append(PLUS_ONE, PLUS_ONE, "shown")
        assert unlisted_count(grid) == 2
        assert unlisted_count(BucketGrid()) == 0


class TestCrossTab:
    def test_counts_bucket_sizes(self):
        grid = BucketGrid()
        grid.append(PLUS_ONE, PLUS_TWO, "a")
        grid.append(PLUS_ONE, PLUS_TWO, "b")
        grid.append(Score.of(-1), Score.of(-2), "c")
        grid.append(PLUS_ONE, NO_DATA, "d")

        rows = cross_tab(grid)

        assert [r.label for r in rows] == ["-1", "0", "+1", "?"]
        assert rows[0].counts == (1, 0, 0, 0, 0, 0)
        assert rows[2].counts == (0, 0, 0, 0, 2, 1)
        assert rows[1].total == 0

    def test_includes_cells_not_shown_in_report(self):
        grid = BucketGrid()
        grid.append(Score.of(0), NO_DATA, "hidden")
        assert flatten(grid) == []
        assert cross_tab(grid)[1].counts[5] == 1

    def test_excludes_wip(self):
        grid = BucketGrid()
        grid.append(PLUS_ONE, PLUS_TWO, "wip", is_wip=True)
        assert sum(r.total for r in cross_tab(grid)) == 0


class TestSummary:
    def test_summary_totals(self):
        grid = _tagged_grid()
        s = summary(grid)
        assert s.wip == 1
        assert s.total == grid.total()

    def test_to_dict(self):
        d = summary(_tagged_grid()).to_dict()
        assert d["columns"] == ["-2", "-1", "0", "+1", "+2", "?"]
        assert d["rows"][2] == {"verified": "+1", "counts": [1, 1, 1, 1, 1, 0]}
        assert d["wip"] == 1

    def test_format_summary_is_fixed_width(self):
        text = format_summary(summary(_tagged_grid()))
        lines = text.splitlines()
        assert lines[0] == "V\\CR  -2  -1   0  +1  +2   ?"
        assert lines[3] == "+1     1   1   1   1   1   0"
        assert lines[4] == "?      1   1   1   1   1   1"
        assert lines[-1] == "WIP: 1"
        assert len({len(line) for line in lines[:-1]}) == 1
