"""Classification predicates shared by the filter engine and statistics.

Every predicate inspects a single event and never looks at its neighbours;
pairing a result with its call is the engine's job.
"""

from __future__ import annotations

from claudist.config.defaults import INTERRUPTED_MARKER, SUB_AGENT_TOOL_NAME
from claudist.models.enums import EventRole
from claudist.models.event import (
    ToolResultContent,
    ToolUseContent,
    TranscriptEvent,
    as_sub_agent_outcome,
)

__all__ = [
    "get_tool_name",
    "is_failed_tool_result",
    "is_sub_agent_call",
    "is_sub_agent_response",
    "is_tool_call",
    "is_tool_result",
]


def _tool_uses(event: TranscriptEvent) -> list[ToolUseContent]:
    if event.role is not EventRole.assistant or not isinstance(event.content, list):
        return []
    return [item for item in event.content if isinstance(item, ToolUseContent)]


def _tool_results(event: TranscriptEvent) -> list[ToolResultContent]:
    if event.role is not EventRole.user or not isinstance(event.content, list):
        return []
    return [item for item in event.content if isinstance(item, ToolResultContent)]


def is_tool_call(event: TranscriptEvent, tool_name: str | None = None) -> bool:
    """Check whether an assistant event invokes a tool.

    Args:
        event: The event to inspect.
        tool_name: If given, only invocations of this tool count.

    Returns:
        True if the event carries a matching tool-use item.

    """
    return any(
        tool_name is None or item.name == tool_name for item in _tool_uses(event)
    )


def get_tool_name(event: TranscriptEvent) -> str | None:
    """Return the name of the first named tool invoked by an assistant event."""
    for item in _tool_uses(event):
        if item.name:
            return item.name
    return None


def is_tool_result(event: TranscriptEvent) -> bool:
    """Check whether a user event carries a tool result."""
    return bool(_tool_results(event))


def is_failed_tool_result(event: TranscriptEvent) -> bool:
    """Check whether a tool result reports a failure or an interruption.

    A result counts as failed when its item is flagged ``is_error`` or its
    string output mentions an interrupted request.
    """
    return any(
        item.is_error is True
        or (isinstance(item.content, str) and INTERRUPTED_MARKER in item.content)
        for item in _tool_results(event)
    )


def is_sub_agent_call(event: TranscriptEvent) -> bool:
    """Check whether an assistant event launches a sub-agent."""
    return is_tool_call(event, SUB_AGENT_TOOL_NAME)


def is_sub_agent_response(event: TranscriptEvent) -> bool:
    """Check whether a user event carries a sub-agent's terminal outcome."""
    if event.role is not EventRole.user:
        return False
    return as_sub_agent_outcome(event.tool_outcome) is not None
