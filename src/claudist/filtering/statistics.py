"""Statistics collector for filter runs.

Reports how many events a configuration removes, attributes every removed
event to one category, and estimates the tokens saved with fixed
per-category weights. The estimate is only good for comparing
configurations against each other.
"""

from __future__ import annotations

from collections.abc import Sequence

from claudist.config.defaults import (
    FAILED_TOOL_TOKEN_ESTIMATE,
    SUB_AGENT_CALL_TOKEN_ESTIMATE,
    SUB_AGENT_RESPONSE_TOKEN_FALLBACK,
    THINKING_TOKEN_ESTIMATE,
    TOOL_TOKEN_ESTIMATE,
)
from claudist.config.filters import FilterConfig
from claudist.filtering.content import has_thinking
from claudist.filtering.engine import filter_conversation, mark_exclusions
from claudist.models.enums import ExclusionReason
from claudist.models.event import TranscriptEvent, as_sub_agent_outcome
from claudist.models.statistics import CategoryCounts, FilterStatistics

__all__ = ["get_filter_statistics"]

_CATEGORY_FIELDS = {
    ExclusionReason.sub_agent_call: "sub_agent_calls",
    ExclusionReason.sub_agent_response: "sub_agent_responses",
    ExclusionReason.tool: "tools",
    ExclusionReason.failed: "failed",
}


def _estimate_tokens(event: TranscriptEvent, reason: ExclusionReason) -> int:
    if reason is ExclusionReason.sub_agent_call:
        return SUB_AGENT_CALL_TOKEN_ESTIMATE
    if reason is ExclusionReason.sub_agent_response:
        outcome = as_sub_agent_outcome(event.tool_outcome)
        return outcome.total_tokens if outcome else SUB_AGENT_RESPONSE_TOKEN_FALLBACK
    if reason is ExclusionReason.tool:
        return TOOL_TOKEN_ESTIMATE
    if reason is ExclusionReason.failed:
        return FAILED_TOOL_TOKEN_ESTIMATE
    return 0


def get_filter_statistics(
    events: Sequence[TranscriptEvent], config: FilterConfig
) -> FilterStatistics:
    """Compute before/after statistics for filtering a transcript.

    ``filtered`` counts every removed event, including events dropped for
    their role or for being empty. ``by_category`` attributes events
    excluded in the mark pass to the first rule that matched them; role
    exclusions have no category. ``thinking`` counts surviving events
    that contain a reasoning block while reasoning stripping is enabled.

    Weights apply per excluded event, not per tool invocation: an excluded
    call and its paired result each count once toward ``tools`` and each
    add the tool estimate to ``tokens_saved``.

    Args:
        events: Events in transcript order.
        config: Resolved filter configuration.

    Returns:
        FilterStatistics for this configuration.

    """
    survivors = filter_conversation(events, config)
    reasons = mark_exclusions(events, config)

    counts: dict[str, int] = dict.fromkeys(CategoryCounts.model_fields, 0)
    tokens_saved = 0

    for event in events:
        reason = reasons.get(event.id)
        if reason is None:
            if config.content.exclude_thinking and has_thinking(event.content):
                counts["thinking"] += 1
                tokens_saved += THINKING_TOKEN_ESTIMATE
            continue

        field = _CATEGORY_FIELDS.get(reason)
        if field is not None:
            counts[field] += 1
        tokens_saved += _estimate_tokens(event, reason)

    return FilterStatistics(
        total=len(events),
        filtered=len(events) - len(survivors),
        by_category=CategoryCounts(**counts),
        tokens_saved=tokens_saved,
    )
