"""Map a patch and its two scores to the CSS class its dashboard row carries."""

from __future__ import annotations

import logging
from enum import Enum

from patchboard_core.models import Patch
from patchboard_core.scores import Score, ScoreKind

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """Display category; the value is written verbatim into the row's class attribute."""

    WORK_IN_PROGRESS = "WIP"
    VERIFIED_WITH_2 = "VerifiedWith2"
    VERIFIED_WITH_1 = "VerifiedWith1"
    VERIFIED_WITH_0 = "VerifiedWith0"
    VERIFIED_WITH_NEG_1 = "VerifiedWithNeg1"
    VERIFIED_WITH_NEG_2 = "VerifiedWithNeg2"
    NOT_VERIFIED_VERIFIED_NEG_1 = "NotVerified Verified-1"
    NOT_VERIFIED_VERIFIED_NEG_2 = "NotVerified Verified-2"
    NOT_VERIFIED = "NotVerified"
    NO_VERIFICATION_DATA = "NoVerificationData"
    INVALID = "INVALID"


_VERIFIED_BY_REVIEW = {
    2: Category.VERIFIED_WITH_2,
    1: Category.VERIFIED_WITH_1,
    0: Category.VERIFIED_WITH_0,
    -1: Category.VERIFIED_WITH_NEG_1,
    -2: Category.VERIFIED_WITH_NEG_2,
}

_NOT_VERIFIED = {
    -1: Category.NOT_VERIFIED_VERIFIED_NEG_1,
    # The calculator never yields -2; the category stays for data scored elsewhere.
    -2: Category.NOT_VERIFIED_VERIFIED_NEG_2,
    0: Category.NOT_VERIFIED,
}


def classify(patch: Patch, v_score: Score, cr_score: Score) -> Category:
    """Return the display category for one patch.

    Never raises: unexpected score values are logged and resolve to
    INVALID or NO_VERIFICATION_DATA so the patch stays visible.
    """
    if patch.work_in_progress:
        return Category.WORK_IN_PROGRESS

    if v_score.kind is ScoreKind.PLUS_ONE:
        category = None
        if not cr_score.is_no_data:
            category = _VERIFIED_BY_REVIEW.get(cr_score.numeric)
        if category is None:
            logger.warning("invalid crScore of %s for %d", cr_score, patch.number)
            return Category.INVALID
        return category

    if v_score.kind is ScoreKind.INT and v_score.value in _NOT_VERIFIED:
        return _NOT_VERIFIED[v_score.value]

    if v_score.is_no_data:
        return Category.NO_VERIFICATION_DATA

    logger.warning("classify(%d): vScore (%s) not recognized", patch.number, v_score)
    return Category.NO_VERIFICATION_DATA
