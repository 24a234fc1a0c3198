"""Selection helpers over a flat event list."""

from __future__ import annotations

from collections.abc import Sequence

from claudist.models.enums import EventRole
from claudist.models.event import TextContent, ToolUseContent, TranscriptEvent

__all__ = [
    "exclude_last_user_message",
    "extract_message_content",
    "filter_by_message_type",
    "get_up_to_user_message",
]


def get_up_to_user_message(
    events: Sequence[TranscriptEvent], user_message_index: int
) -> list[TranscriptEvent]:
    """Return the events that precede the nth user event.

    Args:
        events: Events in transcript order.
        user_message_index: 1-based index of the user event to stop at.

    Returns:
        Everything strictly before the nth user event. Empty when the index
        is not positive; the whole list when there are fewer user events.

    """
    if user_message_index <= 0:
        return []

    result: list[TranscriptEvent] = []
    seen = 0
    for event in events:
        if event.role is EventRole.user:
            seen += 1
            if seen >= user_message_index:
                break
        result.append(event)
    return result


def exclude_last_user_message(
    events: Sequence[TranscriptEvent],
) -> list[TranscriptEvent]:
    """Return the events before the last user event.

    A list without user events is returned unchanged (as a new list).
    """
    for index in range(len(events) - 1, -1, -1):
        if events[index].role is EventRole.user:
            return list(events[:index])
    return list(events)


def filter_by_message_type(
    events: Sequence[TranscriptEvent], role: EventRole | str
) -> list[TranscriptEvent]:
    """Keep only the events produced by ``role``."""
    wanted = EventRole(role)
    return [event for event in events if event.role is wanted]


def extract_message_content(event: TranscriptEvent) -> str:
    """Flatten an event payload to plain text.

    Text items contribute their text, tool invocations a ``[Tool: name]``
    placeholder and bare strings themselves; everything else is skipped.
    Parts are joined by newlines.
    """
    content = event.content

    if isinstance(content, str):
        return content

    if isinstance(content, list):
        parts: list[str] = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, TextContent) and item.text:
                parts.append(item.text)
            elif isinstance(item, ToolUseContent) and item.name:
                parts.append(f"[Tool: {item.name}]")
        return "\n".join(part for part in parts if part)

    if isinstance(content, dict):
        text = content.get("text")
        if text and isinstance(text, str):
            return text
        body = content.get("content")
        if content.get("type") == "text" and body and isinstance(body, str):
            return body

    return ""
