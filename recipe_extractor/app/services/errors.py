"""Domain errors raised by the extraction services.

Pipeline stages catch these at their boundary and turn them into an error
route; they never reach the HTTP layer.
"""

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    INVALID_INPUT = "invalid_input"
    NETWORK_FAILURE = "network_failure"
    SANITIZATION_FAILURE = "sanitization_failure"
    EXTRACTION_DEGRADED = "extraction_degraded"


class RecipeExtractorError(Exception):
    """Base class for recoverable extraction failures."""


class FetchError(RecipeExtractorError):
    """Fetching the source page failed (bad status or transport error)."""

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
    ):
        self.status_code = status_code
        self.status_text = status_text or ""
        self.message = message
        super().__init__(self.describe())

    def describe(self) -> str:
        if self.status_code is not None:
            return f"Failed to fetch URL: {self.status_code} {self.status_text}".rstrip()
        return f"Error fetching URL: {self.message or 'Unknown error'}"


class SanitizationError(RecipeExtractorError):
    """HTML cleanup or markdown conversion failed."""


class ExtractionError(RecipeExtractorError):
    """The extraction collaborator was unavailable or returned garbage."""
