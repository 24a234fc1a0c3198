"""YAML loader for filter configuration files.

A filter file names a starting preset and overrides any of the four axes:

    preset: light
    content:
      exclude_system_reminders: true
      custom_patterns:
        - "<command-name>.*?</command-name>"
    tools:
      exclude_categories: [file_read]
    messages:
      max_length: 2000

Structural problems (missing file, invalid YAML, non-mapping sections) raise.
Field values go through resolve_filter_config and degrade instead of raising.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field

from claudist.config.exceptions import ConfigurationError
from claudist.config.filters import FilterConfig, resolve_filter_config
from claudist.config.validators import FieldValidator
from claudist.logging_config import get_logger
from claudist.models.base import BaseSchema

__all__ = ["FilterFile", "load_filter_config", "load_filter_file"]

logger = get_logger(__name__)

_AXIS_KEYS = ("content", "sub_agents", "tools", "messages")


class FilterFile(BaseSchema):
    """Parsed contents of a filter configuration file.

    Attributes:
        preset: Preset named by the file, if any.
        overrides: Axis overrides declared by the file.

    """

    preset: str | None = None
    overrides: dict[str, dict[str, Any]] = Field(default_factory=dict)


def load_filter_file(path: Path | str) -> FilterFile:
    """Load a filter configuration file without resolving it.

    Args:
        path: Path to the YAML file to load.

    Returns:
        FilterFile: The preset name and axis overrides found in the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file is empty, is not valid YAML, or
            its top level or an axis section is not a mapping.

    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Filter file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML file {path}: {e}") from e

    if data is None:
        raise ConfigurationError(f"Empty YAML file: {path}")

    v = FieldValidator(data, str(path))
    document = v.require_mapping()

    unknown = sorted(set(document) - {"preset", *_AXIS_KEYS})
    if unknown:
        logger.warning("unknown_filter_file_keys", path=str(path), keys=unknown)

    overrides: dict[str, dict[str, Any]] = {}
    for axis in _AXIS_KEYS:
        section = v.optional_mapping(axis)
        if section is not None:
            overrides[axis] = section

    return FilterFile(preset=v.optional("preset", str), overrides=overrides)


def load_filter_config(path: Path | str) -> FilterConfig:
    """Load and resolve a filter configuration file.

    Args:
        path: Path to the YAML file to load.

    Returns:
        FilterConfig: The file's preset (heavy if absent) with its
            overrides applied.

    Example:
        >>> config = load_filter_config("filters.yaml")
        >>> config.content.exclude_thinking
        True

    """
    filter_file = load_filter_file(path)
    return resolve_filter_config(filter_file.preset, filter_file.overrides)
