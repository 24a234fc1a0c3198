"""Filter engine for transcript events.

filter_conversation runs two passes over a flat, chronologically ordered
event list:

1. Mark: classify every event and record the ids to exclude. Marks are
   cumulative and never reversed.
2. Rewrite: drop marked events, strip content patterns from the survivors
   and, if requested, drop events left empty.

A tool result is paired with its call only when the call is the
immediately preceding list entry. Results separated from their call (for
example by interleaved parallel tool calls) are not paired and survive a
tool exclusion unless another rule marks them.

The engine is a pure function: it never mutates its inputs, performs no
I/O and keeps no state between calls.
"""

from __future__ import annotations

from collections.abc import Sequence

from claudist.config.filters import FilterConfig, should_filter_tool
from claudist.filtering.content import ContentStripper
from claudist.filtering.predicates import (
    get_tool_name,
    is_failed_tool_result,
    is_sub_agent_call,
    is_sub_agent_response,
    is_tool_call,
    is_tool_result,
)
from claudist.logging_config import get_logger
from claudist.models.enums import ExclusionReason
from claudist.models.event import MessageContent, TranscriptEvent

__all__ = ["filter_conversation", "mark_exclusions"]

logger = get_logger(__name__)


def mark_exclusions(
    events: Sequence[TranscriptEvent], config: FilterConfig
) -> dict[str, ExclusionReason]:
    """Run the mark pass and report why each excluded event was marked.

    All checks run for every event. When several rules match, the reason
    kept is the first one in this order: sub-agent call, sub-agent
    response, tool call, paired tool result, failed result, role.

    Args:
        events: Events in transcript order.
        config: Resolved filter configuration.

    Returns:
        Mapping of excluded event id to the reason it was first marked.

    """
    marked: dict[str, ExclusionReason] = {}
    # Invocation event id -> name of the tool it invokes
    tool_calls: dict[str, str] = {}
    previous: TranscriptEvent | None = None

    def mark(event: TranscriptEvent, reason: ExclusionReason) -> None:
        marked.setdefault(event.id, reason)

    for event in events:
        if config.sub_agents.exclude_calls and is_sub_agent_call(event):
            mark(event, ExclusionReason.sub_agent_call)

        if config.sub_agents.exclude_responses and is_sub_agent_response(event):
            mark(event, ExclusionReason.sub_agent_response)

        if is_tool_call(event):
            tool_name = get_tool_name(event)
            if tool_name:
                tool_calls[event.id] = tool_name
                if (
                    should_filter_tool(tool_name, config)
                    and not config.tools.exclude_results_only
                ):
                    mark(event, ExclusionReason.tool)

        if is_tool_result(event):
            paired_tool = tool_calls.get(previous.id) if previous is not None else None
            if (
                paired_tool is not None
                and should_filter_tool(paired_tool, config)
                and not config.tools.exclude_calls_only
            ):
                mark(event, ExclusionReason.tool)

            if config.tools.exclude_failed and is_failed_tool_result(event):
                mark(event, ExclusionReason.failed)

        if event.role.value in config.messages.exclude_by_role:
            mark(event, ExclusionReason.role)

        previous = event

    return marked


def _is_empty(content: MessageContent) -> bool:
    return content == "" or (isinstance(content, list) and not content)


def filter_conversation(
    events: Sequence[TranscriptEvent], config: FilterConfig
) -> list[TranscriptEvent]:
    """Filter a transcript according to a configuration.

    Args:
        events: Events in transcript order. Not modified.
        config: Resolved filter configuration.

    Returns:
        New list of surviving events in their original relative order,
        with content rewritten by the content and message rules.

    Example:
        config = resolve_filter_config("light")
        kept = filter_conversation(events, config)

    """
    marked = mark_exclusions(events, config)
    stripper = ContentStripper(config)

    survivors: list[TranscriptEvent] = []
    for event in events:
        if event.id in marked:
            continue

        content = stripper.strip_content(event.content)
        if config.messages.exclude_empty and _is_empty(content):
            continue

        survivors.append(event.model_copy(update={"content": content}))

    logger.debug(
        "conversation_filtered",
        total=len(events),
        marked=len(marked),
        kept=len(survivors),
    )
    return survivors
