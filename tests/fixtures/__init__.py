"""Test fixtures for claudist tests.

This package provides a sample session transcript and helpers for
building transcript lines in the format Claude Code writes them.
"""

import json
from pathlib import Path
from typing import Any

__all__ = [
    "FIXTURES_DIR",
    "SAMPLE_SESSION",
    "load_fixture_lines",
    "transcript_line",
]


FIXTURES_DIR = Path(__file__).parent
SAMPLE_SESSION = FIXTURES_DIR / "sample_session.jsonl"


def load_fixture_lines(filename: str) -> list[str]:
    """Load the non-blank lines of a JSONL fixture file.

    Args:
        filename: Name of the fixture file inside the fixtures directory.

    Returns:
        The lines of the file.

    Raises:
        FileNotFoundError: If the fixture file doesn't exist.

    """
    path = FIXTURES_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Fixture file not found: {path}")
    return [line for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def transcript_line(
    uuid: str,
    role: str,
    content: Any,
    *,
    parent: str | None = None,
    timestamp: str = "2025-01-01T00:00:00.000Z",
    tool_use_result: Any = None,
) -> str:
    """Serialize one transcript entry the way Claude Code writes it.

    Args:
        uuid: Event id.
        role: ``user`` or ``assistant``.
        content: Value of ``message.content``.
        parent: Parent event id.
        timestamp: ISO-8601 timestamp.
        tool_use_result: Optional ``toolUseResult`` value.

    Returns:
        One JSON line.

    """
    record: dict[str, Any] = {
        "parentUuid": parent,
        "isSidechain": False,
        "sessionId": "session-1",
        "type": role,
        "message": {"role": role, "content": content},
        "uuid": uuid,
        "timestamp": timestamp,
    }
    if tool_use_result is not None:
        record["toolUseResult"] = tool_use_result
    return json.dumps(record)
