"""Transcript discovery on the local file system.

Claude Code stores one folder per project under ``~/.claude/projects``. The
folder name is the project's absolute path with every ``/`` replaced by
``-``; each session is a ``<session-id>.jsonl`` file inside it.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from claudist.config.defaults import TRANSCRIPT_SUFFIX
from claudist.logging_config import get_logger
from claudist.models.base import BaseSchema

__all__ = [
    "TranscriptFile",
    "default_projects_dir",
    "find_conversations",
    "find_most_recent_conversation",
    "get_project_folder",
    "read_jsonl_file",
]

logger = get_logger(__name__)

_TRAILING_DASHES = re.compile(r"-+$")


class TranscriptFile(BaseSchema):
    """A session transcript on disk.

    Attributes:
        path: Location of the JSONL file.
        session_id: File name without the ``.jsonl`` suffix.
        mtime: Last modification time.

    """

    path: Path
    session_id: str
    mtime: datetime


def default_projects_dir() -> Path:
    """Return the directory Claude Code writes project transcripts to."""
    return Path.home() / ".claude" / "projects"


def get_project_folder(
    project_path: str | None = None, projects_dir: Path | None = None
) -> Path:
    """Map a project path to its transcript folder.

    Args:
        project_path: Project directory; defaults to the current directory.
        projects_dir: Root of the project folders; defaults to
            ``~/.claude/projects``.

    Returns:
        Path of the folder holding the project's transcripts.

    """
    base = projects_dir if projects_dir is not None else default_projects_dir()
    source = project_path or str(Path.cwd())
    sanitized = _TRAILING_DASHES.sub("", source.replace("/", "-"))
    return base / sanitized


def find_conversations(project_folder: Path) -> list[TranscriptFile]:
    """List the transcripts in a project folder, newest first.

    Args:
        project_folder: Folder returned by get_project_folder.

    Returns:
        Transcript files ordered by modification time, most recent first.
        Empty if the folder does not exist or cannot be listed.

    """
    if not project_folder.is_dir():
        return []

    try:
        files = [
            TranscriptFile(
                path=path,
                session_id=path.name[: -len(TRANSCRIPT_SUFFIX)],
                mtime=datetime.fromtimestamp(path.stat().st_mtime),
            )
            for path in project_folder.iterdir()
            if path.name.endswith(TRANSCRIPT_SUFFIX) and path.is_file()
        ]
    except OSError as e:
        logger.warning(
            "transcript_listing_failed",
            folder=str(project_folder),
            error=str(e),
        )
        return []

    return sorted(files, key=lambda f: f.mtime, reverse=True)


def find_most_recent_conversation(
    project_path: str | None = None, projects_dir: Path | None = None
) -> TranscriptFile | None:
    """Locate the most recently modified transcript of a project.

    Args:
        project_path: Project directory; defaults to the current directory.
        projects_dir: Root of the project folders.

    Returns:
        The newest TranscriptFile, or None if the project has none.

    """
    project_folder = get_project_folder(project_path, projects_dir)
    conversations = find_conversations(project_folder)
    if not conversations:
        logger.info("conversation_not_found", folder=str(project_folder))
        return None
    return conversations[0]


def read_jsonl_file(path: Path) -> list[str]:
    """Read the non-blank lines of a JSONL file.

    Args:
        path: File to read.

    Returns:
        Lines without their line terminators. Empty if the file does not
        exist.

    Raises:
        OSError: If the file exists but cannot be read.

    """
    if not path.exists():
        return []

    with path.open("r", encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\r\n") for line in f if line.strip()]
