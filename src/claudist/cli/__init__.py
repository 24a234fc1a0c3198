"""Command-line interface for claudist.

This module provides the ``claudist`` command, which prints the filtered
conversation of a project (or its filter statistics) to stdout.
"""

from claudist.cli.main import CommandDispatcher, main

__all__ = ["CommandDispatcher", "main"]
