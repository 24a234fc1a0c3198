"""Filtering module for claudist.

This module provides the transcript filter engine and its helpers:
- engine: filter_conversation, mark_exclusions
- content: ContentStripper and markup patterns
- predicates: event classification shared by engine and statistics
- statistics: get_filter_statistics
"""

from claudist.filtering.content import ContentStripper, has_thinking
from claudist.filtering.engine import filter_conversation, mark_exclusions
from claudist.filtering.predicates import (
    get_tool_name,
    is_failed_tool_result,
    is_sub_agent_call,
    is_sub_agent_response,
    is_tool_call,
    is_tool_result,
)
from claudist.filtering.statistics import get_filter_statistics

__all__ = [
    "ContentStripper",
    "filter_conversation",
    "get_filter_statistics",
    "get_tool_name",
    "has_thinking",
    "is_failed_tool_result",
    "is_sub_agent_call",
    "is_sub_agent_response",
    "is_tool_call",
    "is_tool_result",
    "mark_exclusions",
]
