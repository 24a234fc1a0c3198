"""Configuration module for claudist.

This module provides the filter configuration models, presets and
resolution logic, the YAML loader for filter files, and environment
settings via pydantic-settings.
"""

from claudist.config.filters import (
    FILTER_PRESETS,
    TOOL_CATEGORIES,
    ContentFilterConfig,
    FilterConfig,
    MessageFilterConfig,
    SubAgentFilterConfig,
    ToolFilterConfig,
    get_preset,
    merge_overrides,
    resolve_filter_config,
    should_filter_tool,
)
from claudist.config.loader import FilterFile, load_filter_config, load_filter_file
from claudist.config.settings import (
    CacheSettings,
    FilterSettings,
    ProjectSettings,
    Settings,
    get_settings,
)

__all__ = [
    "CacheSettings",
    "ContentFilterConfig",
    "FILTER_PRESETS",
    "FilterConfig",
    "FilterFile",
    "FilterSettings",
    "get_preset",
    "get_settings",
    "load_filter_config",
    "load_filter_file",
    "merge_overrides",
    "MessageFilterConfig",
    "ProjectSettings",
    "resolve_filter_config",
    "Settings",
    "should_filter_tool",
    "SubAgentFilterConfig",
    "TOOL_CATEGORIES",
    "ToolFilterConfig",
]
