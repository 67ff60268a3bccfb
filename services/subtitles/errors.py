"""Exception types raised by the subtitle ingestion and export pipeline."""

from __future__ import annotations

from typing import Any


class SubtitleServiceError(Exception):
    """Base class for subtitle service errors."""


class EncodingError(SubtitleServiceError):
    """Raised when bytes cannot be decoded under the declared encoding."""


class UnsupportedEncodingError(SubtitleServiceError):
    """Raised when an encoding identifier is not in the supported set."""


class FormatError(SubtitleServiceError):
    """Raised when an SRT block is malformed."""

    def __init__(self, message: str, block_number: int | None = None):
        super().__init__(message)
        self.block_number = block_number


class SubtitleValidationError(SubtitleServiceError):
    """Raised when user input fails validation.

    ``violations`` holds ``{"field": ..., "message": ...}`` dicts so every
    problem can be reported in one response; ``submitted`` echoes the
    original field values back to the caller.
    """

    def __init__(
        self,
        message: str,
        violations: list[dict[str, Any]],
        submitted: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.violations = violations
        self.submitted = submitted or {}

    @property
    def messages(self) -> list[str]:
        return [violation["message"] for violation in self.violations]


class PersistenceError(SubtitleServiceError):
    """Raised when the document store fails."""


class DocumentNotFoundError(SubtitleServiceError):
    """Raised when a document does not exist or has no captions."""


class CaptionNotFoundError(SubtitleServiceError):
    """Raised when a caption does not exist within the requested document."""


class PermissionDeniedError(SubtitleServiceError):
    """Raised when a user acts on a document they do not own."""
