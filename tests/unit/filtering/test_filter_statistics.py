"""Unit tests for the statistics collector."""

from typing import Any

from claudist.config.filters import resolve_filter_config
from claudist.filtering.statistics import get_filter_statistics


class TestGetFilterStatistics:
    """Tests for counting and attributing filtered events."""

    def test_sub_agent_response_counted_with_its_tokens(
        self, make_event, sub_agent_outcome: dict[str, Any]
    ) -> None:
        """Test that the outcome's token count is the estimate."""
        event = make_event("user", "result", tool_outcome=sub_agent_outcome)
        config = resolve_filter_config("none", {"sub_agents": {"exclude_responses": True}})

        stats = get_filter_statistics([event], config)

        assert stats.total == 1
        assert stats.filtered == 1
        assert stats.by_category.sub_agent_responses == 1
        assert stats.tokens_saved == 1000

    def test_heavy_preset_breakdown(
        self, make_event, tool_call, tool_result, sub_agent_outcome: dict[str, Any]
    ) -> None:
        """Test counts and weights across categories."""
        events = [
            make_event("user", "go"),
            make_event("assistant", "<thinking>plan</thinking>ok"),
            tool_call("Task"),
            make_event("user", "found", tool_outcome=sub_agent_outcome),
            tool_call("Edit"),
            tool_result("done"),
            tool_call("Bash"),
            tool_result("boom", is_error=True),
        ]
        config = resolve_filter_config(
            "heavy",
            {"tools": {"exclude_categories": ["file_edit"], "exclude_failed": True}},
        )

        stats = get_filter_statistics(events, config)

        assert stats.total == 8
        assert stats.filtered == 5
        assert stats.by_category.model_dump() == {
            "thinking": 1,
            "sub_agent_calls": 1,
            "sub_agent_responses": 1,
            "tools": 2,
            "failed": 1,
        }
        assert stats.tokens_saved == 100 + 150 + 1000 + 200 * 2 + 50

    def test_role_exclusions_count_as_filtered_only(self, make_event) -> None:
        """Test that role exclusions have no category."""
        events = [make_event("user", "q"), make_event("assistant", "a")]
        config = resolve_filter_config("none", {"messages": {"exclude_by_role": ["user"]}})

        stats = get_filter_statistics(events, config)

        assert stats.filtered == 1
        assert stats.by_category.model_dump() == dict.fromkeys(
            ["thinking", "sub_agent_calls", "sub_agent_responses", "tools", "failed"], 0
        )
        assert stats.tokens_saved == 0

    def test_thinking_not_counted_when_disabled(self, make_event) -> None:
        """Test that reasoning blocks are only counted when stripped."""
        events = [make_event("assistant", "<thinking>x</thinking>y")]

        stats = get_filter_statistics(events, resolve_filter_config("none"))

        assert stats.by_category.thinking == 0
        assert stats.filtered == 0

    def test_empty_dropped_events_are_filtered(self, make_event) -> None:
        """Test that events emptied and dropped count as filtered."""
        events = [make_event("assistant", "<thinking>x</thinking>")]
        config = resolve_filter_config("light", {"messages": {"exclude_empty": True}})

        stats = get_filter_statistics(events, config)

        assert stats.filtered == 1
        assert stats.by_category.thinking == 1

    def test_excluded_tool_pair_weighted_per_event(
        self, make_event, tool_call, tool_result
    ) -> None:
        """Test that a dropped call and its paired result each count once."""
        events = [
            make_event("user", "fix it"),
            tool_call("Edit", {"file_path": "a.py"}),
            tool_result("applied"),
        ]
        config = resolve_filter_config("none", {"tools": {"exclude_specific": ["Edit"]}})

        stats = get_filter_statistics(events, config)

        assert stats.filtered == 2
        assert stats.by_category.tools == 2
        assert stats.tokens_saved == 400

    def test_calls_only_exclusion_weights_the_call_alone(
        self, make_event, tool_call, tool_result
    ) -> None:
        """Test that keeping the result leaves one weighted tool event."""
        events = [tool_call("Edit"), tool_result("applied")]
        config = resolve_filter_config(
            "none", {"tools": {"exclude_specific": ["Edit"], "exclude_calls_only": True}}
        )

        stats = get_filter_statistics(events, config)

        assert stats.by_category.tools == 1
        assert stats.tokens_saved == 200
