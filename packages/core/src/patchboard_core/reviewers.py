from __future__ import annotations

from patchboard_core.models import CODE_REVIEW, Patch

DEFAULT_AUTOMATION_ACCOUNT = "jenkins"


def format_vote_value(value: int | None) -> str:
    """Render a reviewer's vote: 1 becomes ``+1``, a missing value ``0``."""
    if value is None:
        return "0"
    if value == 1:
        return "+1"
    return str(value)


def list_reviewers(patch: Patch, automation_account: str = DEFAULT_AUTOMATION_ACCOUNT) -> list[str]:
    """Return ``name(value)`` for every human Code-Review voter, in vote order."""
    return [
        f"{vote.name}({format_vote_value(vote.value)})"
        for vote in patch.votes(CODE_REVIEW)
        if vote.name != automation_account
    ]
