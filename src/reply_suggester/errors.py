"""Error taxonomy for the suggestion pipeline."""

from __future__ import annotations


class SuggestionError(Exception):
    """Base class for errors raised while fetching a suggestion."""


class TransportError(SuggestionError):
    """The inference server could not be reached."""


class ApiError(SuggestionError):
    """The inference server answered with a non-2xx status."""

    EXCERPT_LENGTH = 100

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.excerpt = (body or "")[: self.EXCERPT_LENGTH]
        super().__init__(f"API error: {status} - {self.excerpt}")


class ParseError(SuggestionError, ValueError):
    """Text that had to be strict JSON was not."""
