"""Validation utilities for CLI arguments."""

import argparse
from pathlib import Path

__all__ = ["validate_args"]


def validate_args(args: argparse.Namespace) -> str | None:
    """Validate CLI arguments for consistency.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Error message if validation fails, None if valid.

    """
    config = getattr(args, "config", None)
    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            return f"Error: Filter file not found: {config}"
        if config_path.suffix not in (".yaml", ".yml"):
            return f"Error: Filter file must be YAML: {config}"

    max_length = getattr(args, "max_length", None)
    if max_length is not None and max_length <= 0:
        return "Error: --max-length must be a positive integer"

    projects_dir = getattr(args, "projects_dir", None)
    if projects_dir is not None and not Path(projects_dir).expanduser().is_dir():
        return f"Error: Projects directory not found: {projects_dir}"

    return None
