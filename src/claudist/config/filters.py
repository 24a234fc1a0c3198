"""Filter configuration models, presets and resolution.

A FilterConfig groups independent toggles into four axes:

- content: inline markup stripping (reasoning blocks, system reminders,
  custom patterns)
- sub_agents: removal of sub-agent launches and their terminal responses
- tools: removal of tool calls/results by name, category or failure
- messages: role, emptiness and length rules

Configurations are resolved from a named preset plus per-axis overrides.
Resolution never raises: an unknown preset falls back to the heavy preset
and an override field that does not validate is dropped with a warning
while the valid fields of the same axis still apply.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from claudist.config.defaults import DEFAULT_FILTER_PRESET
from claudist.logging_config import get_logger
from claudist.models.base import BaseSchema
from claudist.models.enums import ToolCategory

__all__ = [
    "ContentFilterConfig",
    "FILTER_PRESETS",
    "FilterConfig",
    "MessageFilterConfig",
    "SubAgentFilterConfig",
    "TOOL_CATEGORIES",
    "ToolFilterConfig",
    "get_preset",
    "merge_overrides",
    "resolve_filter_config",
    "should_filter_tool",
]

logger = get_logger(__name__)


class _AxisConfig(BaseSchema):
    model_config = ConfigDict(frozen=True)


class ContentFilterConfig(_AxisConfig):
    """Inline content stripping.

    Attributes:
        exclude_thinking: Remove ``<thinking>`` and ``<anythingllm:thinking>`` blocks.
        exclude_system_reminders: Remove ``<system-reminder>`` blocks.
        exclude_errors: Advisory only; no filtering is attached to it yet.
        custom_patterns: Extra regular expressions whose matches are removed.

    """

    exclude_thinking: bool = False
    exclude_system_reminders: bool = False
    exclude_errors: bool = False
    custom_patterns: list[str] = Field(default_factory=list)

    @field_validator("custom_patterns", mode="before")
    @classmethod
    def drop_non_string_patterns(cls, value: Any) -> Any:
        """Discard pattern entries that are not strings."""
        if not isinstance(value, (list, tuple)):
            return value
        kept = [item for item in value if isinstance(item, str)]
        if len(kept) != len(value):
            logger.warning(
                "invalid_custom_patterns",
                patterns=[repr(item) for item in value if not isinstance(item, str)],
            )
        return kept


class SubAgentFilterConfig(_AxisConfig):
    """Sub-agent boundaries.

    Attributes:
        exclude_calls: Drop assistant events launching a sub-agent.
        exclude_responses: Drop user events carrying a sub-agent outcome.

    """

    exclude_calls: bool = False
    exclude_responses: bool = False


class ToolFilterConfig(_AxisConfig):
    """Tool identity and outcome rules.

    By default an excluded tool loses both its call and its paired result.
    ``exclude_calls_only`` keeps the result, ``exclude_results_only`` keeps
    the call.

    Attributes:
        exclude_categories: Tool categories to exclude.
        exclude_specific: Tool names to exclude.
        exclude_calls_only: Only drop the invocation of an excluded tool.
        exclude_results_only: Only drop the result of an excluded tool.
        exclude_failed: Drop failed or interrupted tool results.

    """

    exclude_categories: list[ToolCategory] = Field(default_factory=list)
    exclude_specific: list[str] = Field(default_factory=list)
    exclude_calls_only: bool = False
    exclude_results_only: bool = False
    exclude_failed: bool = False

    @field_validator("exclude_categories", mode="before")
    @classmethod
    def drop_unknown_categories(cls, value: Any) -> Any:
        """Discard category names that are not ToolCategory values."""
        if not isinstance(value, (list, tuple, set)):
            return value
        known = {category.value for category in ToolCategory}
        kept: list[str] = []
        unknown: list[str] = []
        for item in value:
            name = str(getattr(item, "value", item))
            if name in known:
                kept.append(name)
            else:
                unknown.append(name)
        if unknown:
            logger.warning("unknown_tool_categories", categories=unknown)
        return kept


class MessageFilterConfig(_AxisConfig):
    """Message-level shape rules.

    Attributes:
        exclude_empty: Drop events (and text items) left empty after stripping.
        exclude_by_role: Roles whose events are dropped.
        max_length: Truncate string payloads longer than this many characters;
            zero or less means no limit.

    """

    exclude_empty: bool = False
    exclude_by_role: list[str] = Field(default_factory=list)
    max_length: int | None = Field(default=None, ge=1)

    @field_validator("max_length", mode="before")
    @classmethod
    def unset_non_positive_length(cls, value: Any) -> Any:
        """Treat a zero or negative length as no limit."""
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value <= 0:
            return None
        return value


class FilterConfig(BaseSchema):
    """Fully populated filter configuration.

    Attributes:
        content: Content pattern axis.
        sub_agents: Sub-agent boundary axis.
        tools: Tool identity/outcome axis.
        messages: Message shape axis.

    """

    model_config = ConfigDict(frozen=True)

    content: ContentFilterConfig = Field(default_factory=ContentFilterConfig)
    sub_agents: SubAgentFilterConfig = Field(default_factory=SubAgentFilterConfig)
    tools: ToolFilterConfig = Field(default_factory=ToolFilterConfig)
    messages: MessageFilterConfig = Field(default_factory=MessageFilterConfig)


_AXES: dict[str, type[_AxisConfig]] = {
    "content": ContentFilterConfig,
    "sub_agents": SubAgentFilterConfig,
    "tools": ToolFilterConfig,
    "messages": MessageFilterConfig,
}

TOOL_CATEGORIES: dict[str, ToolCategory] = {
    # File editing
    "Edit": ToolCategory.file_edit,
    "MultiEdit": ToolCategory.file_edit,
    "Write": ToolCategory.file_edit,
    "NotebookEdit": ToolCategory.file_edit,
    # File reading
    "Read": ToolCategory.file_read,
    "Glob": ToolCategory.file_read,
    "Grep": ToolCategory.file_read,
    "LS": ToolCategory.file_read,
    # Execution
    "Bash": ToolCategory.execution,
    "mcp__ide__executeCode": ToolCategory.execution,
    # Web
    "WebSearch": ToolCategory.web,
    "WebFetch": ToolCategory.web,
    # Sub-agents
    "Task": ToolCategory.analysis,
    # Project bookkeeping
    "ExitPlanMode": ToolCategory.project,
    "TodoWrite": ToolCategory.project,
    # MCP
    "mcp__ide__getDiagnostics": ToolCategory.mcp,
}

FILTER_PRESETS: dict[str, FilterConfig] = {
    # Show everything
    "none": FilterConfig(),
    # Skip reasoning only
    "light": FilterConfig(
        content=ContentFilterConfig(exclude_thinking=True),
    ),
    # Skip reasoning and sub-agents
    "heavy": FilterConfig(
        content=ContentFilterConfig(exclude_thinking=True),
        sub_agents=SubAgentFilterConfig(exclude_calls=True, exclude_responses=True),
    ),
}


def get_preset(name: str | None) -> FilterConfig:
    """Return a fresh copy of a named preset.

    Args:
        name: Preset name (``none``, ``light``, ``heavy``). Case and
            surrounding whitespace are ignored.

    Returns:
        The preset configuration, or the heavy preset when the name is
        empty or unknown.

    """
    key = name.strip().lower() if isinstance(name, str) else ""
    preset = FILTER_PRESETS.get(key)
    if preset is None:
        if key:
            logger.warning(
                "unknown_filter_preset",
                preset=name,
                fallback=DEFAULT_FILTER_PRESET,
            )
        preset = FILTER_PRESETS[DEFAULT_FILTER_PRESET]
    return preset.model_copy(deep=True)


def resolve_filter_config(
    preset: str | None = None,
    overrides: Mapping[str, Any] | FilterConfig | None = None,
) -> FilterConfig:
    """Resolve a configuration from a preset and per-axis overrides.

    Overrides always win over preset values. Each axis is overridden
    independently; fields not mentioned keep their preset value.

    Args:
        preset: Name of the starting preset.
        overrides: Mapping of axis name to a mapping of field overrides,
            e.g. ``{"tools": {"exclude_categories": ["file_edit"]}}``. A
            FilterConfig may be passed instead; only its explicitly set
            fields are applied.

    Returns:
        The resolved FilterConfig.

    Example:
        >>> config = resolve_filter_config("light", {"messages": {"max_length": 500}})
        >>> config.content.exclude_thinking, config.messages.max_length
        (True, 500)

    """
    config = get_preset(preset)
    if overrides is None:
        return config

    if isinstance(overrides, BaseModel):
        overrides = overrides.model_dump(exclude_unset=True)

    updates: dict[str, _AxisConfig] = {}
    for axis, values in overrides.items():
        if axis not in _AXES:
            logger.warning("unknown_filter_axis", axis=axis)
            continue
        if isinstance(values, BaseModel):
            values = values.model_dump(exclude_unset=True)
        if not isinstance(values, Mapping):
            logger.warning(
                "filter_override_rejected",
                axis=axis,
                reason=f"expected mapping, got {type(values).__name__}",
            )
            continue
        updates[axis] = _apply_axis_override(axis, getattr(config, axis), values)

    return config.model_copy(update=updates)


def _apply_axis_override(
    axis: str, current: _AxisConfig, values: Mapping[str, Any]
) -> _AxisConfig:
    axis_model = type(current)
    known = {key: value for key, value in values.items() if key in axis_model.model_fields}
    unknown = sorted(set(values) - set(known))
    if unknown:
        logger.warning("unknown_filter_fields", axis=axis, fields=unknown)

    # Drop rejected fields one round at a time; valid siblings still apply.
    while True:
        try:
            return axis_model.model_validate({**current.model_dump(), **known})
        except ValidationError as e:
            rejected = {
                error["loc"][0]
                for error in e.errors(include_url=False)
                if error["loc"] and error["loc"][0] in known
            }
            logger.warning(
                "filter_override_rejected",
                axis=axis,
                fields=sorted(map(str, rejected)),
                reason=str(e.errors(include_url=False)),
            )
            if not rejected:
                return current
            for name in rejected:
                del known[name]


def merge_overrides(*layers: Mapping[str, Any] | None) -> dict[str, dict[str, Any]]:
    """Merge override mappings; later layers win field by field.

    Args:
        *layers: Override mappings in increasing order of precedence.
            None entries are skipped.

    Returns:
        A new mapping of axis name to merged field overrides.

    """
    merged: dict[str, dict[str, Any]] = {}
    for layer in layers:
        if not layer:
            continue
        for axis, values in layer.items():
            if isinstance(values, Mapping):
                if not isinstance(merged.get(axis), dict):
                    merged[axis] = {}
                merged[axis].update(values)
            else:
                merged[axis] = values
    return merged


def should_filter_tool(tool_name: str, config: FilterConfig) -> bool:
    """Check whether a tool is excluded by name or by category.

    Args:
        tool_name: Name of the invoked tool.
        config: Resolved filter configuration.

    Returns:
        True if the tool is listed in ``exclude_specific`` or belongs to a
        category listed in ``exclude_categories``.

    """
    if tool_name in config.tools.exclude_specific:
        return True

    category = TOOL_CATEGORIES.get(tool_name)
    return category is not None and category in config.tools.exclude_categories
