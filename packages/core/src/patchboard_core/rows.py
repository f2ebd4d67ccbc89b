"""Table-row markup for one patch.

Subject, owner and project are written as received from Gerrit; the only
rewriting applied is to the reviewer cell (non-breaking spaces inside names,
a space after each ``);`` separator).
"""

from __future__ import annotations

from collections.abc import Sequence

from patchboard_core.classifier import Category
from patchboard_core.scores import Score

# Reviewer lists are shown until the change reaches +2.
_REVIEWERS_BELOW = 2


def format_reviewers(reviewers: Sequence[str]) -> str:
    return ";".join(reviewers).replace(" ", "&nbsp;").replace(");", "); ")


def build_row(
    patch_number: int,
    v_score: Score,
    cr_score: Score,
    category: Category,
    reviewers: Sequence[str],
    subject: str,
    owner: str,
    project: str,
    gerrit_url: str = "",
) -> str:
    reviewer_cell = format_reviewers(reviewers) if cr_score.numeric < _REVIEWERS_BELOW else ""
    return (
        f"<tr class='{category.value}'>\n"
        f"  <td><a href='{gerrit_url}/{patch_number}' target='_blank'>{patch_number}</a></td>\n"
        f"  <td>{v_score.display()}</td>\n"
        f"  <td>{cr_score.display()}</td>\n"
        f"  <td>{subject}</td>\n"
        f"  <td>{owner}</td>\n"
        f"  <td>{project}</td>\n"
        f"  <td>\n"
        f"  {reviewer_cell}</td></tr>"
    )
