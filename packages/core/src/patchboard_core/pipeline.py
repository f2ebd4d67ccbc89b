"""Patch -> row -> bucket.

Everything here is synchronous: a batch is pushed into the grid in one go,
so no reader ever sees a half-filled grid.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from patchboard_core.classifier import classify
from patchboard_core.errors import MissingVoteValueError, PatchParseError
from patchboard_core.grid import BucketGrid
from patchboard_core.models import Patch
from patchboard_core.reviewers import DEFAULT_AUTOMATION_ACCOUNT, list_reviewers
from patchboard_core.rows import build_row
from patchboard_core.scores import NO_DATA, review_score, verification_score

logger = logging.getLogger(__name__)


def process_patch(
    patch: Patch,
    grid: BucketGrid,
    gerrit_url: str = "",
    automation_account: str = DEFAULT_AUTOMATION_ACCOUNT,
) -> str:
    """Score, classify and render one patch, then append its row to the grid."""
    v_score = verification_score(patch)
    try:
        cr_score = review_score(patch)
    except MissingVoteValueError as e:
        logger.warning("%s; scoring review as no data", e)
        cr_score = NO_DATA

    category = classify(patch, v_score, cr_score)
    reviewers = list_reviewers(patch, automation_account)
    row = build_row(
        patch.number,
        v_score,
        cr_score,
        category,
        reviewers,
        patch.subject,
        patch.owner,
        patch.project,
        gerrit_url=gerrit_url,
    )
    logger.debug("change %d: V=%s CR=%s class=%s", patch.number, v_score, cr_score, category.value)
    grid.append(v_score, cr_score, row, patch.work_in_progress)
    return row


def populate(
    records: Iterable[dict | Patch],
    grid: BucketGrid,
    gerrit_url: str = "",
    automation_account: str = DEFAULT_AUTOMATION_ACCOUNT,
) -> int:
    """Reset ``grid`` and fill it from a raw batch. Returns the number of patches bucketed.

    Records that cannot be parsed are logged and skipped; they never abort
    the batch.
    """
    grid.reset()
    processed = 0
    for record in records:
        try:
            patch = record if isinstance(record, Patch) else Patch.from_dict(record)
        except PatchParseError as e:
            logger.warning("Skipping unparseable change record: %s", e)
            continue
        process_patch(patch, grid, gerrit_url=gerrit_url, automation_account=automation_account)
        processed += 1
    return processed
