"""CLI main entry point.

This module provides the main entry point for the claudist CLI.
"""

import argparse
import sys
import traceback

from claudist.cli.commands import ShowConversationCommand, ShowStatisticsCommand
from claudist.cli.parser import create_parser
from claudist.cli.validators import validate_args
from claudist.config.settings import Settings
from claudist.exceptions import ClaudistError
from claudist.logging_config import configure_logging, get_logger

__all__ = ["main", "CommandDispatcher"]

logger = get_logger(__name__)


class CommandDispatcher:
    """Dispatches CLI commands to appropriate handlers.

    Attributes:
        _conversation_cmd: Command handler for rendering conversations.
        _stats_cmd: Command handler for filter statistics.

    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the command dispatcher with all command handlers.

        Args:
            settings: Settings shared by the commands; defaults to the
                environment settings.

        """
        self._conversation_cmd = ShowConversationCommand(settings)
        self._stats_cmd = ShowStatisticsCommand(settings)

    def dispatch(self, args: argparse.Namespace) -> int:
        """Dispatch to the appropriate command based on arguments.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for errors).

        """
        command = self._stats_cmd if getattr(args, "stats", False) else self._conversation_cmd
        result = command.execute(args)

        if result.output:
            print(result.output)
        if result.message:
            print(result.message, file=sys.stderr)
        return result.exit_code


def main(argv: list[str] | None = None) -> int:
    """Run the CLI application.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Logs go to stderr; stdout carries only the document
    configure_logging(verbose=getattr(args, "verbose", False), json_output=False)

    error = validate_args(args)
    if error:
        print(error, file=sys.stderr)
        return 1

    try:
        dispatcher = CommandDispatcher()
        return dispatcher.dispatch(args)

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except (ClaudistError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.exception("fatal_error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        if getattr(args, "verbose", False):
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
