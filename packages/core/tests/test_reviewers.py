"""Tests for reviewer listing and row markup."""

from patchboard_core.classifier import Category
from patchboard_core.models import Patch, Vote
from patchboard_core.reviewers import format_vote_value, list_reviewers
from patchboard_core.rows import build_row, format_reviewers
from patchboard_core.scores import NO_DATA, PLUS_ONE, PLUS_TWO, Score


def _patch(*votes):
    return Patch(number=11, labels={"Code-Review": tuple(Vote(n, v) for n, v in votes)})


# ---------------------------------------------------------------------------
# list_reviewers
# ---------------------------------------------------------------------------


class TestListReviewers:
    def test_filters_bot_and_renders_plus_one(self):
        assert list_reviewers(_patch(("automation-bot", 2), ("alice", 1)), "automation-bot") == ["alice(+1)"]

    def test_default_automation_account_is_jenkins(self):
        assert list_reviewers(_patch(("jenkins", 1), ("bob", 0))) == ["bob(0)"]

    def test_negative_and_two_render_naturally(self):
        assert list_reviewers(_patch(("a", -1), ("b", -2), ("c", 2))) == ["a(-1)", "b(-2)", "c(2)"]

    def test_preserves_input_order(self):
        assert list_reviewers(_patch(("zed", 0), ("amy", 0))) == ["zed(0)", "amy(0)"]

    def test_no_code_review_label(self):
        assert list_reviewers(Patch(number=1)) == []

    def test_missing_value_renders_zero(self):
        assert format_vote_value(None) == "0"


# ---------------------------------------------------------------------------
# build_row
# ---------------------------------------------------------------------------


class TestFormatReviewers:
    def test_spaces_become_nbsp_and_separator_gets_space(self):
        assert format_reviewers(["Alice Smith(+1)", "Bob(0)"]) == "Alice&nbsp;Smith(+1); Bob(0)"

    def test_single_reviewer(self):
        assert format_reviewers(["Bob(-1)"]) == "Bob(-1)"

    def test_empty(self):
        assert format_reviewers([]) == ""


class TestBuildRow:
    def _row(self, cr_score, reviewers=("Alice Smith(+1)", "Bob(0)")):
        return build_row(
            42,
            PLUS_ONE,
            cr_score,
            Category.VERIFIED_WITH_1,
            list(reviewers),
            "Fix <b>parser</b>",
            "Alice Smith",
            "platform/core",
            gerrit_url="https://review.example.org",
        )

    def test_contains_class_link_and_cells(self):
        row = self._row(PLUS_ONE)
        assert row.startswith("<tr class='VerifiedWith1'>")
        assert "<a href='https://review.example.org/42' target='_blank'>42</a>" in row
        assert "<td>+1</td>" in row
        assert "<td>platform/core</td>" in row
        assert row.endswith("</td></tr>")

    def test_subject_not_escaped(self):
        assert "<td>Fix <b>parser</b></td>" in self._row(PLUS_ONE)

    def test_reviewers_shown_below_two(self):
        assert "Alice&nbsp;Smith(+1); Bob(0)" in self._row(Score.of(-1))

    def test_reviewers_hidden_at_plus_two(self):
        assert "Alice" not in self._row(PLUS_TWO).split("<td>Alice Smith</td>")[1]

    def test_reviewers_hidden_at_plain_two(self):
        row = self._row(Score.of(2))
        assert "Bob(0)" not in row

    def test_no_data_renders_question_mark(self):
        row = build_row(1, NO_DATA, NO_DATA, Category.NO_VERIFICATION_DATA, [], "s", "o", "p")
        assert row.count("<td>?</td>") == 2
        assert "<a href='/1' target='_blank'>1</a>" in row

    def test_deterministic(self):
        assert self._row(PLUS_ONE) == self._row(PLUS_ONE)
