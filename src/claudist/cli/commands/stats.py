"""Statistics command implementation.

This module implements the command reporting how much of a conversation
the selected filters remove.
"""

from argparse import Namespace

from claudist.cli.commands.base import BaseCommand, CommandResult
from claudist.cli.formatters import format_statistics

__all__ = ["ShowStatisticsCommand"]


class ShowStatisticsCommand(BaseCommand):
    """Command to print filter statistics."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "stats"

    def execute(self, args: Namespace) -> CommandResult:
        """Execute the statistics command.

        Args:
            args: Parsed arguments.

        Returns:
            CommandResult with the formatted statistics.

        Raises:
            TranscriptError: If the project has no transcript.

        """
        config = self.build_filter_config(args)
        service = self.build_service(args)

        stats = service.get_conversation_statistics(
            project_path=getattr(args, "project", None),
            config=config,
            user_message_index=getattr(args, "upto", None),
        )
        return CommandResult(
            exit_code=0,
            output=format_statistics(stats, json_output=getattr(args, "json_output", False)),
        )
