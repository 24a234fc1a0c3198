"""Output formatting utilities for CLI."""

import json

from claudist.models.statistics import FilterStatistics

__all__ = ["format_statistics"]


def format_statistics(stats: FilterStatistics, json_output: bool = False) -> str:
    """Format filter statistics for output.

    Args:
        stats: Statistics to format.
        json_output: Whether to format as JSON (camelCase keys).

    Returns:
        Formatted string output.

    """
    if json_output:
        return json.dumps(stats.model_dump(by_alias=True), indent=2)

    kept = stats.total - stats.filtered
    counts = stats.by_category

    lines = []
    lines.append("=" * 40)
    lines.append("Filter Statistics")
    lines.append("=" * 40)
    lines.append(f"  Messages:          {stats.total}")
    lines.append(f"  Filtered:          {stats.filtered}")
    lines.append(f"  Kept:              {kept}")
    lines.append("")
    lines.append("By category:")
    lines.append(f"  Thinking:          {counts.thinking}")
    lines.append(f"  Sub-agent calls:   {counts.sub_agent_calls}")
    lines.append(f"  Sub-agent results: {counts.sub_agent_responses}")
    lines.append(f"  Tools:             {counts.tools}")
    lines.append(f"  Failed tools:      {counts.failed}")
    lines.append("")
    lines.append(f"Estimated tokens saved: ~{stats.tokens_saved}")

    return "\n".join(lines)
