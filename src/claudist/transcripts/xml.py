"""XML rendering of filtered conversations.

Produces the document handed to callers:

    <?xml version="1.0" encoding="UTF-8"?>
    <conversation>
      <metadata>
        <session_id>...</session_id>
        <project_path>...</project_path>
        <message_count>2</message_count>
        <first_message_time>...</first_message_time>
        <last_message_time>...</last_message_time>
      </metadata>
      <messages>
        <message uuid="..." timestamp="...">
          <role>user</role>
          <content>...</content>
        </message>
      </messages>
    </conversation>

All text and attribute values are escaped, JSON payloads of tool items and
tool outcomes included. Characters XML 1.0 forbids (terminal escape codes
in command output, for example) are replaced with U+FFFD, so the output is
always well-formed.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any
from xml.sax.saxutils import escape

from claudist.models.event import (
    MessageContent,
    TextContent,
    ToolResultContent,
    ToolUseContent,
    TranscriptEvent,
)

__all__ = [
    "create_empty_conversation_xml",
    "create_error_xml",
    "escape_xml",
    "format_content",
    "format_message",
    "is_error_xml",
    "to_xml",
]

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}
# Code points outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def escape_xml(text: str) -> str:
    """Escape ``& < > " '`` and replace characters XML cannot carry."""
    return escape(_INVALID_XML_CHARS.sub("\ufffd", text), _QUOTE_ENTITIES)


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def _format_item(item: Any) -> str:
    if isinstance(item, str):
        return escape_xml(item)

    if isinstance(item, TextContent):
        return escape_xml(item.text) if item.text else ""

    if isinstance(item, ToolUseContent):
        payload = escape_xml(_to_json(item.input)) if item.input else ""
        return (
            f'<tool_use name="{escape_xml(item.name or "")}" '
            f'id="{escape_xml(item.id or "")}">{payload}</tool_use>'
        )

    if isinstance(item, ToolResultContent):
        payload = escape_xml(_to_json(item.content)) if item.content else ""
        error = ' is_error="true"' if item.is_error else ""
        return (
            f'<tool_result id="{escape_xml(item.tool_use_id or "")}"{error}>'
            f"{payload}</tool_result>"
        )

    return ""


def format_content(content: MessageContent) -> str:
    """Render an event payload as escaped XML text.

    Args:
        content: String, list of content items, or an opaque payload.

    Returns:
        The rendered content. Items that render to nothing are omitted;
        the rest are joined by newlines.

    """
    if content is None:
        return ""

    if isinstance(content, str):
        return escape_xml(content)

    if isinstance(content, list):
        return "\n".join(part for part in map(_format_item, content) if part)

    if isinstance(content, dict):
        for key in ("text", "content"):
            if isinstance(content.get(key), str):
                return escape_xml(content[key])

    return escape_xml(_to_json(content))


def format_message(event: TranscriptEvent) -> str:
    """Render one event as a ``<message>`` element."""
    lines = [
        f'    <message uuid="{escape_xml(event.id)}" '
        f'timestamp="{escape_xml(event.timestamp)}">',
        f"      <role>{escape_xml(event.role.value)}</role>",
        f"      <content>{format_content(event.content)}</content>",
    ]
    if event.tool_outcome:
        lines.append(
            f"      <tool_outcome>{escape_xml(_to_json(event.tool_outcome))}</tool_outcome>"
        )
    lines.append("    </message>")
    return "\n".join(lines)


def to_xml(
    events: Sequence[TranscriptEvent],
    session_id: str | None = None,
    project_path: str | None = None,
) -> str:
    """Render a filtered conversation as an XML document.

    Args:
        events: Events to render, in order.
        session_id: Transcript session id for the metadata block.
        project_path: Project path for the metadata block.

    Returns:
        The complete document, including the XML declaration.

    """
    metadata = []
    if session_id:
        metadata.append(f"    <session_id>{escape_xml(session_id)}</session_id>")
    if project_path:
        metadata.append(f"    <project_path>{escape_xml(project_path)}</project_path>")
    metadata.append(f"    <message_count>{len(events)}</message_count>")
    if events:
        metadata.append(
            f"    <first_message_time>{escape_xml(events[0].timestamp)}</first_message_time>"
        )
        metadata.append(
            f"    <last_message_time>{escape_xml(events[-1].timestamp)}</last_message_time>"
        )

    lines = [
        _XML_DECLARATION,
        "<conversation>",
        "  <metadata>",
        *metadata,
        "  </metadata>",
        "  <messages>",
        *(format_message(event) for event in events),
        "  </messages>",
        "</conversation>",
    ]
    return "\n".join(lines)


def create_error_xml(error: str) -> str:
    """Render a failure document, distinct from an empty conversation."""
    return "\n".join(
        [
            _XML_DECLARATION,
            "<error>",
            f"  <message>{escape_xml(error)}</message>",
            "</error>",
        ]
    )


def create_empty_conversation_xml(reason: str | None = None) -> str:
    """Render a conversation document with no messages.

    Args:
        reason: Optional note explaining why nothing was returned.

    Returns:
        The document, with the reason in a ``<note>`` element if given.

    """
    lines = [
        _XML_DECLARATION,
        "<conversation>",
        "  <metadata>",
        "    <message_count>0</message_count>",
    ]
    if reason:
        lines.append(f"    <note>{escape_xml(reason)}</note>")
    lines.extend(["  </metadata>", "  <messages></messages>", "</conversation>"])
    return "\n".join(lines)


def is_error_xml(document: str) -> bool:
    """Check whether a document was produced by create_error_xml."""
    return document.startswith(f"{_XML_DECLARATION}\n<error>")
