"""Transcript event model for claudist.

This module defines TranscriptEvent, the canonical representation of one
line of a Claude Code session log, together with the typed content items it
can carry and the structured outcome recorded for sub-agent runs.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from claudist.models.base import BaseSchema
from claudist.models.enums import EventRole

__all__ = [
    "ContentItem",
    "MessageContent",
    "OtherContent",
    "SUB_AGENT_OUTCOME_FIELDS",
    "SubAgentOutcome",
    "TextContent",
    "ToolResultContent",
    "ToolUseContent",
    "TranscriptEvent",
    "as_sub_agent_outcome",
]

# Wire keys whose joint presence identifies a sub-agent's terminal outcome.
SUB_AGENT_OUTCOME_FIELDS = ("totalDurationMs", "totalTokens", "totalToolUseCount")

_KNOWN_ITEM_TYPES = frozenset({"text", "tool_use", "tool_result"})


class _ContentItemBase(BaseSchema):
    """Common configuration for content items.

    Items are immutable and keep any keys the model does not declare, so a
    filtered event carries everything the transcript line carried.
    """

    model_config = ConfigDict(extra="allow", frozen=True)


class TextContent(_ContentItemBase):
    """Plain text block."""

    type: Literal["text"] = "text"
    text: str | None = None


class ToolUseContent(_ContentItemBase):
    """Tool invocation requested by the assistant.

    Attributes:
        id: Opaque call identifier answered by a later tool result.
        name: Tool name (Read, Bash, Task, ...).
        input: Arbitrary input payload, usually a mapping.

    """

    type: Literal["tool_use"] = "tool_use"
    id: str | None = None
    name: str | None = None
    input: Any = None


class ToolResultContent(_ContentItemBase):
    """Output of a tool invocation, fed back on a user event.

    Attributes:
        tool_use_id: Call identifier this result answers.
        content: Arbitrary output payload, usually a string.
        is_error: Whether the tool reported a failure.

    """

    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str | None = None
    content: Any = None
    is_error: bool | None = None


class OtherContent(_ContentItemBase):
    """Any typed item the pipeline does not interpret (images, documents, ...)."""

    type: str | None = None


def _content_item_tag(value: Any) -> str:
    if isinstance(value, dict):
        item_type = value.get("type")
    elif isinstance(value, BaseModel):
        item_type = getattr(value, "type", None)
    else:
        return "raw"
    return item_type if item_type in _KNOWN_ITEM_TYPES else "other"


ContentItem = Annotated[
    Union[
        Annotated[TextContent, Tag("text")],
        Annotated[ToolUseContent, Tag("tool_use")],
        Annotated[ToolResultContent, Tag("tool_result")],
        Annotated[OtherContent, Tag("other")],
        Annotated[Any, Tag("raw")],
    ],
    Discriminator(_content_item_tag),
]

MessageContent = Union[str, list[ContentItem], dict[str, Any], None]


class TranscriptEvent(BaseSchema):
    """One conversation entry of a session transcript.

    Events are produced once by the parser and never modified afterwards;
    the filter engine derives new events with ``model_copy``.

    Attributes:
        id: Unique identity within the transcript (wire key ``uuid``).
        parent_id: Causally preceding event id, None for roots (``parentUuid``).
        timestamp: ISO-8601 instant, kept as text.
        role: Who produced the event (wire key ``type``).
        content: String, list of content items, or an opaque payload.
        tool_outcome: Outcome attached to tool results (``toolUseResult``).

    """

    model_config = ConfigDict(frozen=True)

    id: str
    parent_id: str | None = None
    timestamp: str
    role: EventRole
    content: MessageContent = None
    tool_outcome: Any = None


class SubAgentOutcome(BaseSchema):
    """Structured outcome recorded when a sub-agent session finishes.

    Attributes:
        duration_ms: Wall clock time of the sub-agent run.
        total_tokens: Tokens consumed by the sub-agent.
        tool_invocation_count: Number of tool calls the sub-agent made.

    """

    duration_ms: float = Field(alias="totalDurationMs")
    total_tokens: int = Field(alias="totalTokens")
    tool_invocation_count: int = Field(alias="totalToolUseCount")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_sub_agent_outcome(value: Any) -> SubAgentOutcome | None:
    """Interpret a tool outcome as a sub-agent outcome, if it has that shape.

    The shape is the only signal separating a sub-agent's terminal response
    from an ordinary tool result: a mapping with a non-zero
    ``totalDurationMs``, a non-zero ``totalTokens`` and a numeric
    ``totalToolUseCount`` (zero allowed).

    Args:
        value: The raw ``tool_outcome`` of an event.

    Returns:
        The parsed SubAgentOutcome, or None for any other shape.

    """
    if not isinstance(value, Mapping):
        return None

    duration, tokens, count = (value.get(key) for key in SUB_AGENT_OUTCOME_FIELDS)
    if not (_is_number(duration) and duration):
        return None
    if not (_is_number(tokens) and tokens):
        return None
    if not _is_number(count):
        return None

    return SubAgentOutcome(
        duration_ms=duration,
        total_tokens=int(tokens),
        tool_invocation_count=int(count),
    )
