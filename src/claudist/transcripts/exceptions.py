"""Exceptions for transcripts module.

This module defines exceptions raised while locating, validating
and reading transcript files.
"""

from claudist.exceptions import ClaudistError

__all__ = ["TranscriptAccessError", "TranscriptError"]


class TranscriptError(ClaudistError):
    """Base exception for transcript-related errors."""

    pass


class TranscriptAccessError(TranscriptError):
    """Raised when a transcript file may not be read."""

    pass
