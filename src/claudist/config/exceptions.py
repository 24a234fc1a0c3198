"""Exceptions for config module.

This module defines exceptions related to configuration loading,
parsing, and validation errors.
"""

from claudist.exceptions import ClaudistError

__all__ = ["ConfigurationError"]


class ConfigurationError(ClaudistError):
    """Base exception for configuration-related errors."""

    pass
