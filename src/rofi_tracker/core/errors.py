"""rofi-tracker error types."""

from __future__ import annotations


class RofiTrackerError(Exception):
    """Base exception for rofi-tracker."""

    pass


class IndexServiceError(RofiTrackerError):
    """The index service could not answer a query."""

    pass


class IndexUnavailableError(IndexServiceError):
    """The index service is not reachable on the session bus."""

    pass


class IndexQueryError(IndexServiceError):
    """The index service rejected the query or returned an unusable reply."""

    pass


class CursorFormatError(IndexQueryError):
    """The serialized result cursor does not match the expected layout."""

    pass


class TokenError(RofiTrackerError):
    """A context token does not match the token grammar."""

    pass
