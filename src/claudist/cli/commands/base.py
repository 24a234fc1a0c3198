"""Base command class for CLI commands.

This module defines the abstract base class for CLI commands
following the Command pattern, and the helpers every command uses to
turn arguments into a filter configuration and a service.
"""

from abc import ABC, abstractmethod
from argparse import Namespace
from pathlib import Path
from typing import Any

from claudist.config.filters import FilterConfig, merge_overrides, resolve_filter_config
from claudist.config.loader import load_filter_file
from claudist.config.settings import Settings, get_settings
from claudist.conversation.service import ConversationService
from claudist.models.base import BaseSchema
from claudist.transcripts.cache import get_global_cache

__all__ = ["BaseCommand", "CommandResult"]


class CommandResult(BaseSchema):
    """Result of a command execution.

    Attributes:
        exit_code: Exit code for the CLI (0 for success).
        output: Text to print on stdout.
        message: Optional message to display on stderr.

    """

    exit_code: int
    output: str = ""
    message: str | None = None


def _flag_overrides(args: Namespace) -> dict[str, dict[str, Any]]:
    overrides: dict[str, dict[str, Any]] = {}
    if getattr(args, "exclude_reminders", None):
        overrides.setdefault("content", {})["exclude_system_reminders"] = True
    if getattr(args, "exclude_tools", None) is not None:
        overrides.setdefault("tools", {})["exclude_specific"] = args.exclude_tools
    if getattr(args, "exclude_categories", None) is not None:
        overrides.setdefault("tools", {})["exclude_categories"] = args.exclude_categories
    if getattr(args, "max_length", None) is not None:
        overrides.setdefault("messages", {})["max_length"] = args.max_length
    return overrides


class BaseCommand(ABC):
    """Abstract base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the command.

        Args:
            settings: Settings to use; defaults to the environment settings.

        """
        self.settings = settings if settings is not None else get_settings()

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the command name for logging and display."""
        pass

    @abstractmethod
    def execute(self, args: Namespace) -> CommandResult:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            CommandResult with exit code and output.

        """
        pass

    def build_filter_config(self, args: Namespace) -> FilterConfig:
        """Resolve the filter configuration for a run.

        The preset comes from ``--preset``, else the filter file, else
        ``CLAUDIST_FILTER_PRESET``. Overrides are layered environment, then
        filter file, then individual flags.

        Args:
            args: Parsed command-line arguments.

        Returns:
            The resolved FilterConfig.

        Raises:
            FileNotFoundError: If ``--config`` names a missing file.
            ConfigurationError: If the filter file is malformed.

        """
        env = self.settings.filter
        config_path = getattr(args, "config", None)
        filter_file = load_filter_file(config_path) if config_path else None

        preset = (
            getattr(args, "preset", None)
            or (filter_file.preset if filter_file else None)
            or env.filter_preset
        )
        overrides = merge_overrides(
            env.to_overrides(),
            filter_file.overrides if filter_file else None,
            _flag_overrides(args),
        )
        return resolve_filter_config(preset, overrides)

    def build_service(self, args: Namespace) -> ConversationService:
        """Create the conversation service for a run."""
        projects_dir = getattr(args, "projects_dir", None)
        return ConversationService(
            projects_dir=(
                Path(projects_dir).expanduser()
                if projects_dir
                else self.settings.projects.projects_dir
            ),
            cache=get_global_cache(),
            max_file_size_bytes=self.settings.projects.max_file_size_bytes,
        )
