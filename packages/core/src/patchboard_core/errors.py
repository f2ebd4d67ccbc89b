"""Exception hierarchy shared by the core, the store and the CLI."""

from __future__ import annotations


class PatchboardError(Exception):
    """Base class for every error raised by patchboard."""


class PatchParseError(PatchboardError, ValueError):
    """A raw change record could not be turned into a Patch."""


class MissingVoteValueError(PatchboardError, ValueError):
    """A Code-Review vote carried no value.

    Verification votes default a missing value to 0; review votes do not,
    so the caller decides how to contain it.
    """

    def __init__(self, patch_number: int, voter: str):
        super().__init__(f"Code-Review vote by {voter!r} on change {patch_number} has no value")
        self.patch_number = patch_number
        self.voter = voter


class ReportUnavailableError(PatchboardError):
    """The report could not be produced; readers get no partial output."""


class GerritFetchError(PatchboardError):
    """Fetching changes from Gerrit failed after all retries."""


class NotificationError(PatchboardError):
    """Posting the summary to the webhook failed."""
