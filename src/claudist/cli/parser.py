"""CLI argument parser configuration.

This module provides the argument parser for the claudist CLI.
"""

import argparse

from claudist import __version__
from claudist.config.filters import FILTER_PRESETS
from claudist.models.enums import ToolCategory

__all__ = ["create_parser"]


def _comma_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        An ArgumentParser configured with all CLI options.

    """
    parser = argparse.ArgumentParser(
        prog="claudist",
        description=(
            "claudist - Render filtered Claude Code conversation transcripts "
            "as XML for other agents to read."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Current conversation of this directory, last user turn excluded
  claudist

  # Conversation of another project before its 3rd user message
  claudist --project /home/me/work/api --upto 3

  # Keep sub-agent traffic, drop file reads
  claudist --preset light --exclude-categories file_read

  # Apply a filter file and truncate long messages
  claudist --config filters.yaml --max-length 2000

  # Show what the heavy preset removes, as JSON
  claudist --stats --json

Filter settings are also read from CLAUDIST_* environment variables.
Command-line flags override the config file, which overrides the environment.
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Transcript selection
    parser.add_argument(
        "--project",
        type=str,
        metavar="PATH",
        help="Project directory whose transcript to read (default: current directory)",
    )

    parser.add_argument(
        "--projects-dir",
        type=str,
        metavar="DIR",
        help="Root of the Claude Code project folders (default: ~/.claude/projects)",
    )

    parser.add_argument(
        "--upto",
        type=int,
        metavar="N",
        help="Only include messages before the Nth user message",
    )

    # Filter configuration
    parser.add_argument(
        "--preset",
        type=str,
        choices=sorted(FILTER_PRESETS),
        help=(
            "Filter preset: none (no filtering), light (skip reasoning), "
            "heavy (skip reasoning and sub-agents). Default: heavy"
        ),
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="FILE",
        help="YAML filter file with a preset and per-axis overrides",
    )

    parser.add_argument(
        "--exclude-tools",
        type=_comma_list,
        metavar="NAMES",
        help="Comma-separated tool names to exclude (e.g. Read,Bash)",
    )

    parser.add_argument(
        "--exclude-categories",
        type=_comma_list,
        metavar="CATEGORIES",
        help=(
            "Comma-separated tool categories to exclude: "
            + ", ".join(category.value for category in ToolCategory)
        ),
    )

    parser.add_argument(
        "--exclude-reminders",
        action="store_true",
        default=None,
        help="Strip <system-reminder> blocks",
    )

    parser.add_argument(
        "--max-length",
        type=int,
        metavar="CHARS",
        help="Truncate message text longer than this many characters",
    )

    # Output
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print filter statistics instead of the conversation",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output statistics as JSON instead of formatted text",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )

    return parser
