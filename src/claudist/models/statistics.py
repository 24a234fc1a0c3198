"""FilterStatistics model for claudist.

This module defines the record returned by the statistics collector,
describing how much of a transcript a filter configuration removes.
"""

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from claudist.models.base import BaseSchema

__all__ = ["CategoryCounts", "FilterStatistics"]


class CategoryCounts(BaseSchema):
    """Per-category counts of filtered events.

    Attributes:
        thinking: Surviving events that had reasoning blocks stripped.
        sub_agent_calls: Excluded sub-agent invocations.
        sub_agent_responses: Excluded sub-agent terminal responses.
        tools: Excluded calls and results of excluded tools.
        failed: Excluded failed or interrupted tool results.

    """

    model_config = ConfigDict(alias_generator=to_camel)

    thinking: int = 0
    sub_agent_calls: int = 0
    sub_agent_responses: int = 0
    tools: int = 0
    failed: int = 0


class FilterStatistics(BaseSchema):
    """Before/after statistics for one filter run.

    ``tokens_saved`` is a rough estimate built from fixed per-category
    weights. It is meant for comparing configurations, not for accounting.

    Attributes:
        total: Number of input events.
        filtered: Number of events removed by the filter.
        by_category: Attribution of removed events to categories.
        tokens_saved: Approximate tokens no longer sent downstream.

    """

    model_config = ConfigDict(alias_generator=to_camel)

    total: int = 0
    filtered: int = 0
    by_category: CategoryCounts = Field(default_factory=CategoryCounts)
    tokens_saved: int = 0
