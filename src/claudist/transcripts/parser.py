"""Line parser for JSONL session transcripts.

Turns raw transcript lines into TranscriptEvent records. Lines that are not
JSON, lack one of ``uuid``/``timestamp``/``type``/``message``, or describe
something other than a user or assistant turn are dropped.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from claudist.logging_config import get_logger
from claudist.models.event import TranscriptEvent
from claudist.performance import measure
from claudist.transcripts.file_system import read_jsonl_file

__all__ = ["parse_conversation_entry", "parse_conversation_file"]

logger = get_logger(__name__)

_REQUIRED_KEYS = ("uuid", "timestamp", "type", "message")


def parse_conversation_entry(line: str) -> TranscriptEvent | None:
    """Parse one transcript line.

    Args:
        line: A single JSONL line.

    Returns:
        The parsed event, or None if the line is malformed or is not a
        conversation entry.

    """
    try:
        record = json.loads(line)
    except json.JSONDecodeError:
        return None

    if not isinstance(record, dict):
        return None
    if not all(record.get(key) for key in _REQUIRED_KEYS):
        return None

    message = record["message"]
    if not isinstance(message, dict):
        return None

    try:
        return TranscriptEvent(
            id=record["uuid"],
            parent_id=record.get("parentUuid") or None,
            timestamp=record["timestamp"],
            role=record["type"],
            content=message.get("content"),
            tool_outcome=record.get("toolUseResult"),
        )
    except ValidationError as e:
        logger.debug(
            "transcript_line_rejected",
            uuid=record.get("uuid"),
            type=record.get("type"),
            errors=e.error_count(),
        )
        return None


def parse_conversation_file(path: Path) -> list[TranscriptEvent]:
    """Parse every conversation entry of a transcript file.

    Args:
        path: JSONL transcript to read.

    Returns:
        Events in file order. Malformed lines are skipped.

    """
    with measure(f"parse_conversation_file:{path}"):
        events = [
            event
            for line in read_jsonl_file(path)
            if (event := parse_conversation_entry(line)) is not None
        ]

    logger.debug("conversation_parsed", path=str(path), events=len(events))
    return events
