"""Enumeration types for claudist.

This module defines the enum types used throughout the filtering pipeline,
including event roles, tool categories and exclusion reasons.
"""

from enum import Enum

__all__ = [
    "EventRole",
    "ExclusionReason",
    "ToolCategory",
]


class EventRole(str, Enum):
    """Author of a transcript event.

    Attributes:
        user: A human turn, or a tool result fed back to the model.
        assistant: A model turn, possibly carrying tool invocations.
    """

    user = "user"
    assistant = "assistant"


class ToolCategory(str, Enum):
    """Named groups of tool identifiers used for bulk exclusion.

    Attributes:
        file_edit: Edit, MultiEdit, Write, NotebookEdit.
        file_read: Read, Glob, Grep, LS.
        execution: Bash and code execution tools.
        web: WebSearch, WebFetch.
        analysis: Task (sub-agent launches).
        project: Planning and todo bookkeeping.
        mcp: MCP-specific tools.
    """

    file_edit = "file_edit"
    file_read = "file_read"
    execution = "execution"
    web = "web"
    analysis = "analysis"
    project = "project"
    mcp = "mcp"


class ExclusionReason(str, Enum):
    """Why the filter engine marked an event for removal.

    Attributes:
        sub_agent_call: Invocation of the sub-agent launch tool.
        sub_agent_response: Terminal response carrying a sub-agent outcome.
        tool: Call or paired result of an excluded tool.
        failed: Failed or interrupted tool result.
        role: Role listed in the excluded roles.
    """

    sub_agent_call = "sub_agent_call"
    sub_agent_response = "sub_agent_response"
    tool = "tool"
    failed = "failed"
    role = "role"
