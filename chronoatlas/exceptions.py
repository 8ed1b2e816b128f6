"""
Exception hierarchy for historic event generation.

Every error carries the HTTP status the API layer answers with, so route
handlers never need to know which stage failed.
"""

from typing import Any


class ChronoAtlasError(Exception):
    """Base exception for all request-level failures."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class QueryValidationError(ChronoAtlasError):
    """A required query parameter is absent or empty."""

    status_code = 400


class UpstreamCallError(ChronoAtlasError):
    """The generative text API call failed or returned an unusable envelope."""


class ParseError(ChronoAtlasError):
    """The entity list response did not contain a usable JSON array."""


class StorageError(ChronoAtlasError):
    """Reading from or writing to the payload cache failed."""
