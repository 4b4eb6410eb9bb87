"""
Client-facing error taxonomy.

Every error here is a `ValueError` so the API layer can map "bad input" to a 400
the same way for all of them. Anything that is not a `SearchError` is treated as an
internal failure (500) and never echoed back to the caller.

An address that matches no known place is intentionally NOT an error: the resolver
falls back to the default location and reports `source="default"` instead.
"""

from __future__ import annotations


class SearchError(ValueError):
    """Base class for request validation errors (surfaced as HTTP 400)."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidCoordinate(SearchError):
    """Latitude/longitude supplied by the caller is malformed or out of range."""

    code = "INVALID_COORDINATE"


class MissingRequiredField(SearchError):
    """A required field (e.g. a coordinate on the filtered path) is absent."""

    code = "MISSING_REQUIRED_FIELD"


class InvalidFilter(SearchError):
    """The `filters` object could not be mapped to a FilterSpec."""

    code = "INVALID_FILTER"
