"""CLI command implementations.

This module exports the command classes for the CLI.
"""

from claudist.cli.commands.base import BaseCommand, CommandResult
from claudist.cli.commands.conversation import ShowConversationCommand
from claudist.cli.commands.stats import ShowStatisticsCommand

__all__ = [
    "BaseCommand",
    "CommandResult",
    "ShowConversationCommand",
    "ShowStatisticsCommand",
]
