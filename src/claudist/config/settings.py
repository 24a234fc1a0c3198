"""Application settings using pydantic-settings.

This module provides environment variable support for configuration
using pydantic-settings. Only the command-line shell reads these; the
filter engine always receives an explicit FilterConfig.

Environment Variables:
    CLAUDIST_FILTER_PRESET: Starting preset (none, light, heavy)
    CLAUDIST_EXCLUDE_THINKING: Strip reasoning blocks
    CLAUDIST_EXCLUDE_SYSTEM_REMINDERS: Strip system reminder blocks
    CLAUDIST_EXCLUDE_ERRORS: Advisory error flag
    CLAUDIST_CUSTOM_PATTERNS: Comma-separated regular expressions to strip
    CLAUDIST_EXCLUDE_SUBAGENT_CALLS: Drop sub-agent launches
    CLAUDIST_EXCLUDE_SUBAGENT_RESPONSES: Drop sub-agent terminal responses
    CLAUDIST_EXCLUDE_TOOL_CATEGORIES: Comma-separated tool categories
    CLAUDIST_EXCLUDE_TOOLS: Comma-separated tool names
    CLAUDIST_EXCLUDE_TOOL_CALLS_ONLY: Keep results of excluded tools
    CLAUDIST_EXCLUDE_TOOL_RESULTS_ONLY: Keep calls of excluded tools
    CLAUDIST_EXCLUDE_FAILED_TOOLS: Drop failed tool results
    CLAUDIST_EXCLUDE_EMPTY: Drop messages left empty after stripping
    CLAUDIST_EXCLUDE_ROLES: Comma-separated roles to drop
    CLAUDIST_MAX_MESSAGE_LENGTH: Truncate longer string payloads
    CLAUDIST_PROJECTS_DIR: Root of the Claude Code project transcripts
    CLAUDIST_MAX_FILE_SIZE_BYTES: Largest transcript that will be read
    CLAUDIST_CACHE_MAX_SIZE: Parsed transcripts kept in memory
    CLAUDIST_CACHE_TTL_SECONDS: Lifetime of a cached transcript
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from claudist.config.defaults import (
    DEFAULT_CACHE_MAX_SIZE,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_MAX_FILE_SIZE_BYTES,
)
from claudist.config.filters import FilterConfig, resolve_filter_config
from claudist.logging_config import get_logger

__all__ = [
    "CacheSettings",
    "FilterSettings",
    "ProjectSettings",
    "Settings",
    "get_settings",
]

logger = get_logger(__name__)

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})

# Environment field -> (axis, FilterConfig field)
_OVERRIDE_TARGETS: dict[str, tuple[str, str]] = {
    "exclude_thinking": ("content", "exclude_thinking"),
    "exclude_system_reminders": ("content", "exclude_system_reminders"),
    "exclude_errors": ("content", "exclude_errors"),
    "custom_patterns": ("content", "custom_patterns"),
    "exclude_subagent_calls": ("sub_agents", "exclude_calls"),
    "exclude_subagent_responses": ("sub_agents", "exclude_responses"),
    "exclude_tool_categories": ("tools", "exclude_categories"),
    "exclude_tools": ("tools", "exclude_specific"),
    "exclude_tool_calls_only": ("tools", "exclude_calls_only"),
    "exclude_tool_results_only": ("tools", "exclude_results_only"),
    "exclude_failed_tools": ("tools", "exclude_failed"),
    "exclude_empty": ("messages", "exclude_empty"),
    "exclude_roles": ("messages", "exclude_by_role"),
    "max_message_length": ("messages", "max_length"),
}

_LIST_FIELDS = frozenset(
    {"custom_patterns", "exclude_tool_categories", "exclude_tools", "exclude_roles"}
)


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class FilterSettings(BaseSettings):
    """Filter overrides read from the environment.

    Every field is optional; unset variables leave the preset untouched.
    Malformed booleans and lengths are ignored with a warning rather than
    failing startup.

    Attributes:
        filter_preset: Starting preset name.
        exclude_thinking: Strip reasoning blocks.
        exclude_system_reminders: Strip system reminder blocks.
        exclude_errors: Advisory error flag.
        custom_patterns: Comma-separated regular expressions.
        exclude_subagent_calls: Drop sub-agent launches.
        exclude_subagent_responses: Drop sub-agent terminal responses.
        exclude_tool_categories: Comma-separated category names.
        exclude_tools: Comma-separated tool names.
        exclude_tool_calls_only: Keep results of excluded tools.
        exclude_tool_results_only: Keep calls of excluded tools.
        exclude_failed_tools: Drop failed tool results.
        exclude_empty: Drop messages left empty.
        exclude_roles: Comma-separated roles.
        max_message_length: Truncation length.

    """

    model_config = SettingsConfigDict(
        env_prefix="CLAUDIST_",
        env_ignore_empty=True,
        extra="ignore",
    )

    filter_preset: str | None = None
    exclude_thinking: bool | None = None
    exclude_system_reminders: bool | None = None
    exclude_errors: bool | None = None
    custom_patterns: str | None = None
    exclude_subagent_calls: bool | None = None
    exclude_subagent_responses: bool | None = None
    exclude_tool_categories: str | None = None
    exclude_tools: str | None = None
    exclude_tool_calls_only: bool | None = None
    exclude_tool_results_only: bool | None = None
    exclude_failed_tools: bool | None = None
    exclude_empty: bool | None = None
    exclude_roles: str | None = None
    max_message_length: int | None = None

    @field_validator(
        "exclude_thinking",
        "exclude_system_reminders",
        "exclude_errors",
        "exclude_subagent_calls",
        "exclude_subagent_responses",
        "exclude_tool_calls_only",
        "exclude_tool_results_only",
        "exclude_failed_tools",
        "exclude_empty",
        mode="before",
    )
    @classmethod
    def parse_flag(cls, value: Any) -> Any:
        """Accept the usual spellings of booleans, ignore anything else."""
        if not isinstance(value, str):
            return value
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        logger.warning("invalid_boolean_setting", value=value)
        return None

    @field_validator("max_message_length", mode="before")
    @classmethod
    def parse_length(cls, value: Any) -> Any:
        """Ignore lengths that are not positive integers."""
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                logger.warning("invalid_max_message_length", value=value)
                return None
        if isinstance(value, int) and value <= 0:
            logger.warning("invalid_max_message_length", value=value)
            return None
        return value

    def to_overrides(self) -> dict[str, dict[str, Any]]:
        """Translate the set variables into FilterConfig overrides.

        Returns:
            Mapping of axis name to field overrides, containing only axes
            with at least one variable set.

        """
        overrides: dict[str, dict[str, Any]] = {}
        for field, (axis, target) in _OVERRIDE_TARGETS.items():
            value = getattr(self, field)
            if value is None:
                continue
            if field in _LIST_FIELDS:
                value = _split_list(value)
            overrides.setdefault(axis, {})[target] = value
        return overrides

    def resolve(self) -> FilterConfig:
        """Resolve the filter configuration described by the environment.

        Returns:
            The preset named by ``CLAUDIST_FILTER_PRESET`` (heavy when unset
            or unknown) with the environment overrides applied.

        """
        return resolve_filter_config(self.filter_preset, self.to_overrides())


class ProjectSettings(BaseSettings):
    """Location and size limits of transcript files.

    Attributes:
        projects_dir: Directory holding one folder per project.
        max_file_size_bytes: Largest transcript that will be read.

    """

    model_config = SettingsConfigDict(
        env_prefix="CLAUDIST_",
        env_ignore_empty=True,
        extra="ignore",
    )

    projects_dir: Path = Field(
        default_factory=lambda: Path.home() / ".claude" / "projects",
        description="Directory holding Claude Code project transcripts",
    )
    max_file_size_bytes: int = Field(
        default=DEFAULT_MAX_FILE_SIZE_BYTES,
        ge=1,
        description="Largest transcript file that will be read",
    )

    @field_validator("projects_dir", mode="after")
    @classmethod
    def expand_home(cls, value: Path) -> Path:
        """Expand a leading ``~``."""
        return value.expanduser()


class CacheSettings(BaseSettings):
    """Settings for the parsed-transcript cache.

    Attributes:
        max_size: Maximum number of cached transcripts.
        ttl_seconds: Lifetime of a cached transcript.

    """

    model_config = SettingsConfigDict(
        env_prefix="CLAUDIST_CACHE_",
        env_ignore_empty=True,
        extra="ignore",
    )

    max_size: int = Field(
        default=DEFAULT_CACHE_MAX_SIZE,
        ge=1,
        description="Maximum number of cached transcripts",
    )
    ttl_seconds: int = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        ge=1,
        description="Lifetime of a cached transcript in seconds",
    )


class Settings(BaseSettings):
    """Root settings container.

    Aggregates all subsystem settings into a single configuration object.
    Use get_settings() to access the cached singleton instance.

    Attributes:
        filter: Filter overrides from the environment.
        projects: Transcript location settings.
        cache: Transcript cache settings.

    """

    model_config = SettingsConfigDict(
        env_prefix="CLAUDIST_",
        extra="ignore",
    )

    filter: FilterSettings = Field(default_factory=FilterSettings)
    projects: ProjectSettings = Field(default_factory=ProjectSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings singleton.

    Returns:
        The Settings instance with values from environment variables.

    """
    return Settings()
