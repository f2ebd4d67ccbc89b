"""Verification and Code-Review scores derived from a patch's label votes.

A Score is a tagged value rather than a bare int because the dashboard
distinguishes "every voter agreed at +1" (PLUS_ONE) from a plain minimum of
1 (INT(1)). The two share a numeric equivalent, which is what index mapping
and range checks use, but classification compares tags.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from patchboard_core.errors import MissingVoteValueError
from patchboard_core.models import CODE_REVIEW, VERIFIED, Patch

NO_DATA_VALUE = -999


class ScoreKind(str, Enum):
    NO_DATA = "no_data"
    INT = "int"
    PLUS_ONE = "plus_one"
    PLUS_TWO = "plus_two"


@dataclass(frozen=True)
class Score:
    kind: ScoreKind
    value: int = 0

    @classmethod
    def of(cls, value: int) -> Score:
        return cls(ScoreKind.INT, value)

    @property
    def is_no_data(self) -> bool:
        return self.kind is ScoreKind.NO_DATA

    @property
    def numeric(self) -> int:
        """Numeric equivalent: the sentinel for NO_DATA, 1 and 2 for the tags."""
        if self.kind is ScoreKind.NO_DATA:
            return NO_DATA_VALUE
        if self.kind is ScoreKind.PLUS_ONE:
            return 1
        if self.kind is ScoreKind.PLUS_TWO:
            return 2
        return self.value

    def display(self) -> str:
        if self.kind is ScoreKind.NO_DATA:
            return "?"
        if self.kind is ScoreKind.PLUS_ONE:
            return "+1"
        if self.kind is ScoreKind.PLUS_TWO:
            return "+2"
        return str(self.value)

    def __str__(self) -> str:
        return self.display()


NO_DATA = Score(ScoreKind.NO_DATA)
PLUS_ONE = Score(ScoreKind.PLUS_ONE, 1)
PLUS_TWO = Score(ScoreKind.PLUS_TWO, 2)


def verification_score(patch: Patch) -> Score:
    """Aggregate the ``Verified`` votes of a patch.

    Any +1 wins, then any -1; everything else (including values outside
    -1..1) collapses to 0. A missing vote value counts as 0.
    """
    votes = patch.votes(VERIFIED)
    if not votes:
        return NO_DATA

    values = [v.value if v.value else 0 for v in votes]
    highest = max(values)
    lowest = min(values)

    if highest == 1:
        return PLUS_ONE
    if lowest == -1:
        return Score.of(-1)
    return Score.of(0)


def review_score(patch: Patch) -> Score:
    """Aggregate the ``Code-Review`` votes of a patch.

    Unanimous approval within [0, 2] or [0, 1] collapses to the ceiling tag;
    otherwise the lowest vote is reported, so any objection dominates.

    Raises:
        MissingVoteValueError: a vote has no value.
    """
    votes = patch.votes(CODE_REVIEW)
    if not votes:
        return NO_DATA

    values = []
    for vote in votes:
        if vote.value is None:
            raise MissingVoteValueError(patch.number, vote.name)
        values.append(vote.value)
    highest = max(values)
    lowest = min(values)

    if highest == 2 and lowest == 0:
        return PLUS_TWO
    if highest == 1 and lowest == 0:
        return PLUS_ONE
    return Score.of(lowest)
