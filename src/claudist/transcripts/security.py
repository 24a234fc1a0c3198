"""Access checks applied before a transcript is read."""

from __future__ import annotations

from pathlib import Path

from claudist.config.defaults import DEFAULT_MAX_FILE_SIZE_BYTES
from claudist.transcripts.exceptions import TranscriptAccessError

__all__ = ["validate_file_path", "validate_file_size"]


def validate_file_path(file_path: Path | str, base_dir: Path | str) -> None:
    """Ensure a file lies inside an allowed directory.

    Both paths are resolved first, so ``..`` segments and symlinks cannot
    escape ``base_dir``.

    Args:
        file_path: File about to be read.
        base_dir: Directory the file must live in.

    Raises:
        TranscriptAccessError: If the file is outside ``base_dir``.

    """
    resolved = Path(file_path).resolve()
    base = Path(base_dir).resolve()
    if not resolved.is_relative_to(base):
        raise TranscriptAccessError(
            f"Access denied: {file_path} is outside {base_dir}"
        )


def validate_file_size(
    file_path: Path | str, max_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
) -> None:
    """Ensure a file is not larger than ``max_bytes``.

    A missing file passes; reading it later yields no events.

    Args:
        file_path: File about to be read.
        max_bytes: Largest accepted size.

    Raises:
        TranscriptAccessError: If the file is too large.

    """
    try:
        size = Path(file_path).stat().st_size
    except FileNotFoundError:
        return

    if size > max_bytes:
        raise TranscriptAccessError(
            f"File too large: {size} bytes exceeds maximum of {max_bytes} bytes"
        )
