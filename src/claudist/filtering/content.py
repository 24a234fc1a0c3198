"""Content pattern stripping for transcript payloads.

Removes reasoning blocks, system reminders and operator-supplied patterns
from string payloads, truncates long strings and trims whitespace. Array
content is rewritten item by item; payload shapes that are not understood
pass through untouched.

Matching is regex based and non-greedy. A nested block such as
``<thinking>a<thinking>b</thinking>c</thinking>`` loses everything up to the
first closing marker and keeps ``c</thinking>``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from claudist.config.defaults import TRUNCATION_MARKER
from claudist.config.filters import FilterConfig
from claudist.logging_config import get_logger
from claudist.models.event import (
    ContentItem,
    MessageContent,
    TextContent,
    ToolResultContent,
    ToolUseContent,
)

__all__ = [
    "ContentStripper",
    "SYSTEM_REMINDER_PATTERN",
    "THINKING_PATTERNS",
    "has_thinking",
    "iter_strings",
]

logger = get_logger(__name__)

THINKING_PATTERNS = (
    re.compile(r"<anythingllm:thinking>.*?</anythingllm:thinking>", re.DOTALL),
    re.compile(r"<thinking>.*?</thinking>", re.DOTALL),
)
SYSTEM_REMINDER_PATTERN = re.compile(
    r"<system-reminder>.*?</system-reminder>", re.DOTALL
)


def _compile_custom_patterns(patterns: list[str]) -> list[re.Pattern[str]]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            logger.debug("custom_pattern_invalid", pattern=pattern, error=str(e))
    return compiled


class ContentStripper:
    """Applies the content and length rules of a FilterConfig.

    Custom patterns are compiled once per stripper; patterns that do not
    compile are skipped.

    Example:
        stripper = ContentStripper(config)
        cleaned = stripper.strip_content(event.content)

    """

    def __init__(self, config: FilterConfig) -> None:
        """Initialize the stripper for a configuration.

        Args:
            config: Resolved filter configuration.

        """
        self._config = config
        self._custom_patterns = _compile_custom_patterns(config.content.custom_patterns)

    def strip_text(self, text: str) -> str:
        """Strip markup from a single string payload.

        Args:
            text: The string to rewrite.

        Returns:
            The rewritten string, trimmed of surrounding whitespace.

        """
        content = self._config.content

        if content.exclude_thinking:
            for pattern in THINKING_PATTERNS:
                text = pattern.sub("", text)

        if content.exclude_system_reminders:
            text = SYSTEM_REMINDER_PATTERN.sub("", text)

        for pattern in self._custom_patterns:
            text = pattern.sub("", text)

        max_length = self._config.messages.max_length
        if max_length is not None:
            # Length is measured on the trimmed string.
            text = text.strip()
            if len(text) > max_length:
                text = text[:max_length] + TRUNCATION_MARKER

        return text.strip()

    def strip_content(self, content: MessageContent) -> MessageContent:
        """Rewrite an event payload.

        Args:
            content: String, list of content items, or any other payload.

        Returns:
            The rewritten payload. Lists are always new lists; other
            shapes are returned as-is.

        """
        if isinstance(content, str):
            return self.strip_text(content)

        if isinstance(content, list):
            items = [self._strip_item(item) for item in content]
            return [item for item in items if self._keep_item(item)]

        return content

    def _strip_item(self, item: ContentItem) -> ContentItem:
        if isinstance(item, TextContent) and item.text:
            return item.model_copy(update={"text": self.strip_text(item.text)})

        if isinstance(item, ToolUseContent) and isinstance(item.input, dict):
            new_input = {
                key: self.strip_text(value) if isinstance(value, str) else value
                for key, value in item.input.items()
            }
            return item.model_copy(update={"input": new_input})

        if isinstance(item, ToolResultContent) and isinstance(item.content, str):
            return item.model_copy(update={"content": self.strip_text(item.content)})

        return item

    def _keep_item(self, item: ContentItem) -> bool:
        # Only text items are dropped for emptiness; tool items always stay.
        if not self._config.messages.exclude_empty:
            return True
        return not (isinstance(item, TextContent) and item.text == "")


def iter_strings(content: MessageContent) -> Iterator[str]:
    """Yield every string payload that stripping would rewrite.

    Args:
        content: An event payload.

    Yields:
        The string itself, text item texts, string tool inputs and string
        tool result outputs.

    """
    if isinstance(content, str):
        yield content
        return

    if not isinstance(content, list):
        return

    for item in content:
        if isinstance(item, TextContent) and isinstance(item.text, str):
            yield item.text
        elif isinstance(item, ToolUseContent) and isinstance(item.input, dict):
            yield from (value for value in item.input.values() if isinstance(value, str))
        elif isinstance(item, ToolResultContent) and isinstance(item.content, str):
            yield item.content


def has_thinking(content: Any) -> bool:
    """Check whether a payload contains a complete reasoning block."""
    return any(
        pattern.search(text)
        for text in iter_strings(content)
        for pattern in THINKING_PATTERNS
    )
