"""Error taxonomy for the eightstream pipeline."""
from __future__ import annotations
from typing import Optional


class EightStreamError(Exception):
    """Base class for every failure raised inside the pipeline."""


class NetworkError(EightStreamError):
    """Non-success status, timeout, or connection failure."""

    def __init__(self, message: str, *, url: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ParseError(EightStreamError):
    """Malformed JSON or manifest."""


class ExtractionError(EightStreamError):
    """Expected markup or script content not found."""


class MissingFieldError(EightStreamError):
    """Required key absent from a parsed structure."""


class NotFoundError(EightStreamError):
    """Season, episode or file selection miss."""


class ValidationError(EightStreamError):
    """Malformed input, e.g. a non-string file path or a non-URL manifest link."""
