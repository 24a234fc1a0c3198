"""Transcripts module for claudist.

This module provides the collaborators around the filter engine:
- file_system: locating project transcripts on disk
- parser: turning JSONL lines into TranscriptEvent records
- cache: LRU/TTL cache of parsed transcripts
- security: path and size checks before reading
- xml: rendering filtered conversations
"""

from claudist.transcripts.cache import (
    ConversationCache,
    clear_global_cache,
    get_cache_key,
    get_global_cache,
)
from claudist.transcripts.exceptions import TranscriptAccessError, TranscriptError
from claudist.transcripts.file_system import (
    TranscriptFile,
    default_projects_dir,
    find_conversations,
    find_most_recent_conversation,
    get_project_folder,
    read_jsonl_file,
)
from claudist.transcripts.parser import parse_conversation_entry, parse_conversation_file
from claudist.transcripts.security import validate_file_path, validate_file_size
from claudist.transcripts.xml import (
    create_empty_conversation_xml,
    create_error_xml,
    escape_xml,
    format_content,
    format_message,
    is_error_xml,
    to_xml,
)

__all__ = [
    "clear_global_cache",
    "ConversationCache",
    "create_empty_conversation_xml",
    "create_error_xml",
    "default_projects_dir",
    "escape_xml",
    "find_conversations",
    "find_most_recent_conversation",
    "format_content",
    "format_message",
    "get_cache_key",
    "get_global_cache",
    "get_project_folder",
    "is_error_xml",
    "parse_conversation_entry",
    "parse_conversation_file",
    "read_jsonl_file",
    "to_xml",
    "TranscriptAccessError",
    "TranscriptError",
    "TranscriptFile",
    "validate_file_path",
    "validate_file_size",
]
