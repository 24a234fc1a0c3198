"""Conversation command implementation.

This module implements the default command: render the current
conversation of a project as XML.
"""

from argparse import Namespace

from claudist.cli.commands.base import BaseCommand, CommandResult
from claudist.logging_config import get_logger
from claudist.transcripts.xml import is_error_xml

__all__ = ["ShowConversationCommand"]

logger = get_logger(__name__)


class ShowConversationCommand(BaseCommand):
    """Command to print a filtered conversation."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "conversation"

    def execute(self, args: Namespace) -> CommandResult:
        """Execute the conversation command.

        Without ``--upto`` the last user message and everything after it
        are left out; with it, everything from the Nth user message on.

        Args:
            args: Parsed arguments.

        Returns:
            CommandResult with the XML document. The exit code is 1 when
            the document reports a failure.

        """
        config = self.build_filter_config(args)
        service = self.build_service(args)
        project = getattr(args, "project", None)
        upto = getattr(args, "upto", None)

        logger.debug("conversation_requested", project=project, upto=upto)

        if upto is None:
            document = service.get_current_conversation(project, config)
        else:
            document = service.get_current_conversation_upto(upto, project, config)

        return CommandResult(
            exit_code=1 if is_error_xml(document) else 0,
            output=document,
        )
