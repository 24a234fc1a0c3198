"""Conversation module for claudist.

This module provides traversal and retrieval on top of parsed transcripts:
- tree: reply-tree reconstruction and branch selection
- selection: slicing a flat event list by user turn or role
- service: ConversationService, the locate/filter/render pipeline
"""

from claudist.conversation.selection import (
    exclude_last_user_message,
    extract_message_content,
    filter_by_message_type,
    get_up_to_user_message,
)
from claudist.conversation.service import ConversationService, EventSelector
from claudist.conversation.tree import (
    ConversationNode,
    build_conversation_tree,
    flatten_conversation_tree,
    get_most_recent_branch,
    sort_by_timestamp,
)

__all__ = [
    "build_conversation_tree",
    "ConversationNode",
    "ConversationService",
    "EventSelector",
    "exclude_last_user_message",
    "extract_message_content",
    "filter_by_message_type",
    "flatten_conversation_tree",
    "get_most_recent_branch",
    "get_up_to_user_message",
    "sort_by_timestamp",
]
