"""Patch records parsed from Gerrit ChangeInfo JSON.

Only the fields the dashboard reads are kept. Gerrit sends label votes under
``labels.<name>.all`` when the query asks for DETAILED_LABELS; a label with
no ``all`` key is treated the same as a label with no votes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from patchboard_core.errors import PatchParseError

VERIFIED = "Verified"
CODE_REVIEW = "Code-Review"


@dataclass(frozen=True)
class Vote:
    """One voter's value on one label. ``value`` is None when Gerrit omitted it."""

    name: str
    value: int | None = None


@dataclass(frozen=True)
class Patch:
    number: int
    subject: str = ""
    owner: str = ""
    project: str = ""
    work_in_progress: bool = False
    labels: dict[str, tuple[Vote, ...]] = field(default_factory=dict)

    def votes(self, label: str) -> tuple[Vote, ...]:
        """Return the votes cast on ``label``; empty when the label is absent."""
        return self.labels.get(label, ())

    @classmethod
    def from_dict(cls, data: dict) -> Patch:
        """Build a Patch from one element of a Gerrit ``/changes/`` response."""
        if not isinstance(data, dict):
            raise PatchParseError(f"expected a change object, got {type(data).__name__}")
        try:
            number = int(data["_number"])
        except (KeyError, TypeError, ValueError) as e:
            raise PatchParseError(f"change record has no usable _number: {e}") from e

        labels: dict[str, tuple[Vote, ...]] = {}
        try:
            for label_name, label in (data.get("labels") or {}).items():
                entries = (label or {}).get("all") or []
                labels[label_name] = tuple(_parse_vote(entry) for entry in entries)
        except (AttributeError, TypeError, ValueError) as e:
            raise PatchParseError(f"change {number} has malformed label data: {e}") from e

        owner = data.get("owner") or {}
        if not isinstance(owner, dict):
            raise PatchParseError(f"change {number} has malformed owner: {owner!r}")
        return cls(
            number=number,
            subject=_text(data, "subject", number),
            owner=_text(owner, "name", number),
            project=_text(data, "project", number),
            work_in_progress=bool(data.get("work_in_progress", False)),
            labels=labels,
        )


def _parse_vote(entry: dict) -> Vote:
    value = entry.get("value")
    if value is not None:
        # Older Gerrit versions send numeric strings ("1", "-1").
        value = int(value)
    return Vote(name=entry.get("name", ""), value=value)


def _text(data: dict, key: str, number: int) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise PatchParseError(f"change {number} has non-text {key}: {value!r}")
    return value
