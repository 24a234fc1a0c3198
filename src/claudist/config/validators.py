"""Field validation utilities for YAML configuration parsing.

This module provides a fluent API for validating and extracting fields
from configuration dictionaries with type checking and error handling.
"""

from __future__ import annotations

from typing import Any, TypeVar

from claudist.config.exceptions import ConfigurationError

__all__ = ["FieldValidator"]

T = TypeVar("T")


class FieldValidator:
    """Fluent validator for configuration dictionary fields.

    Provides a clean API for validating and extracting typed fields from
    configuration dictionaries with consistent error handling.

    Example:
        v = FieldValidator(data, "filters.yaml")
        v.require_mapping()
        preset = v.optional("preset", str)
        tools = v.optional_mapping("tools")

    """

    def __init__(self, data: Any, context: str) -> None:
        """Initialize the validator with data and context.

        Args:
            data: Parsed document whose fields are validated.
            context: Context string for error messages (e.g., a file path).

        """
        self._data = data
        self._context = context

    @property
    def context(self) -> str:
        """Get the context string for error messages."""
        return self._context

    def require_mapping(self) -> dict[str, Any]:
        """Validate that the data is a dictionary/mapping.

        Returns:
            The data if it's a dict.

        Raises:
            ConfigurationError: If data is not a dict.

        """
        if not isinstance(self._data, dict):
            raise ConfigurationError(
                f"Invalid structure: expected mapping, "
                f"got {type(self._data).__name__} in {self._context}"
            )
        return self._data

    def optional(
        self,
        field: str,
        expected_type: type[T],
        *,
        default: T | None = None,
    ) -> T | None:
        """Validate and extract an optional field.

        Args:
            field: Name of the field to validate.
            expected_type: Expected type of the field value.
            default: Default value if field is not present.

        Returns:
            The validated value, or default if not present.

        Raises:
            ConfigurationError: If field is present but has wrong type.

        """
        value = self.require_mapping().get(field)

        if value is None:
            return default

        if not isinstance(value, expected_type):
            raise ConfigurationError(
                f"Invalid '{field}': expected {expected_type.__name__}, "
                f"got {type(value).__name__} in {self._context}"
            )

        return value

    def optional_mapping(self, field: str) -> dict[str, Any] | None:
        """Validate and extract an optional nested mapping.

        Args:
            field: Name of the field to validate.

        Returns:
            The nested mapping, or None if not present.

        Raises:
            ConfigurationError: If field is present but not a mapping.

        """
        value = self.require_mapping().get(field)

        if value is None:
            return None

        if not isinstance(value, dict):
            raise ConfigurationError(
                f"Invalid '{field}': expected mapping, "
                f"got {type(value).__name__} in {self._context}"
            )

        return value
