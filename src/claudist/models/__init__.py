"""Models module for claudist.

This module contains the data models shared by the pipeline:
- base: BaseSchema for Pydantic models
- enums: EventRole, ToolCategory, ExclusionReason
- event: TranscriptEvent, content items, SubAgentOutcome
- statistics: FilterStatistics, CategoryCounts
"""

from claudist.models.base import BaseSchema
from claudist.models.enums import EventRole, ExclusionReason, ToolCategory
from claudist.models.event import (
    SUB_AGENT_OUTCOME_FIELDS,
    ContentItem,
    MessageContent,
    OtherContent,
    SubAgentOutcome,
    TextContent,
    ToolResultContent,
    ToolUseContent,
    TranscriptEvent,
    as_sub_agent_outcome,
)
from claudist.models.statistics import CategoryCounts, FilterStatistics

__all__ = [
    # Base
    "BaseSchema",
    # Enums
    "EventRole",
    "ExclusionReason",
    "ToolCategory",
    # Events
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
    # Statistics
    "CategoryCounts",
    "FilterStatistics",
]
