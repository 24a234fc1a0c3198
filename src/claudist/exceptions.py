"""Base exceptions for claudist.

This module defines the root exception hierarchy for the entire
package. All domain-specific exceptions should inherit from ClaudistError.
"""

__all__ = ["ClaudistError"]


class ClaudistError(Exception):
    """Base exception for all claudist errors.

    Provides a common exception type for clients to catch package errors.
    """

    pass
