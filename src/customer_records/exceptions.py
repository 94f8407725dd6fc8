"""Errors raised by the lookup, export and reporting services."""

from __future__ import annotations


class CustomerRecordsError(Exception):
    """Base class for service errors surfaced to the API layer."""


class CustomerNotFoundError(CustomerRecordsError, LookupError):
    """The id or document does not resolve to an active customer."""


class UnsupportedFormatError(CustomerRecordsError, ValueError):
    """The requested export format is not one of the recognized formats."""

    def __init__(self, requested: str, supported: tuple[str, ...]) -> None:
        self.requested = requested
        self.supported = supported
        super().__init__(f"Unsupported export format: {requested!r} (expected one of {', '.join(supported)})")


class ExportFailedError(CustomerRecordsError):
    """Output could not be produced; no partial content is returned."""
