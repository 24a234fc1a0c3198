"""Conversation retrieval service.

Ties the collaborators together: locate the newest transcript of a project,
load its events through the cache, select a slice, run the filter engine
and render the result as XML.

Rendering methods never raise. A missing transcript or an empty selection
yields an empty conversation document with a note; any failure yields an
error document, so callers can tell "nothing to show" from "broken".
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from claudist.config.defaults import DEFAULT_MAX_FILE_SIZE_BYTES
from claudist.config.filters import FilterConfig, resolve_filter_config
from claudist.conversation.selection import (
    exclude_last_user_message,
    get_up_to_user_message,
)
from claudist.filtering.engine import filter_conversation
from claudist.filtering.statistics import get_filter_statistics
from claudist.logging_config import get_logger
from claudist.models.event import TranscriptEvent
from claudist.models.statistics import FilterStatistics
from claudist.performance import measure
from claudist.transcripts.cache import ConversationCache, get_cache_key, get_global_cache
from claudist.transcripts.exceptions import TranscriptError
from claudist.transcripts.file_system import (
    TranscriptFile,
    default_projects_dir,
    find_most_recent_conversation,
)
from claudist.transcripts.parser import parse_conversation_file
from claudist.transcripts.security import validate_file_path, validate_file_size
from claudist.transcripts.xml import (
    create_empty_conversation_xml,
    create_error_xml,
    to_xml,
)

__all__ = ["ConversationService", "EventSelector"]

logger = get_logger(__name__)

EventSelector = Callable[[Sequence[TranscriptEvent]], list[TranscriptEvent]]

NO_CONVERSATIONS_MESSAGE = "No conversations found for this project"
INVALID_INDEX_MESSAGE = "User message index must be greater than 0"


class ConversationService:
    """Renders filtered conversations of Claude Code projects.

    Attributes:
        projects_dir: Root of the per-project transcript folders.
        cache: Cache of parsed transcripts.
        max_file_size_bytes: Largest transcript that will be read.

    """

    def __init__(
        self,
        projects_dir: Path | None = None,
        cache: ConversationCache | None = None,
        max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
    ) -> None:
        """Initialize the service.

        Args:
            projects_dir: Root of the project folders; defaults to
                ``~/.claude/projects``.
            cache: Cache to use; defaults to the process-wide cache.
            max_file_size_bytes: Largest transcript that will be read.

        """
        self.projects_dir = projects_dir if projects_dir is not None else default_projects_dir()
        self.cache = cache if cache is not None else get_global_cache()
        self.max_file_size_bytes = max_file_size_bytes

    def find_transcript(self, project_path: str | None = None) -> TranscriptFile | None:
        """Locate the newest transcript of a project."""
        return find_most_recent_conversation(project_path, self.projects_dir)

    def load_events(self, transcript: TranscriptFile) -> list[TranscriptEvent]:
        """Return the parsed events of a transcript, using the cache.

        The cache key includes the file's modification time, so an appended
        transcript is parsed again and the stale entry is dropped.

        Args:
            transcript: Transcript to load.

        Returns:
            Events in file order.

        Raises:
            TranscriptAccessError: If the file is outside the projects
                directory or too large.

        """
        path = str(transcript.path)
        key = get_cache_key(path, str(transcript.mtime.timestamp()))

        events = self.cache.get(key)
        if events is not None:
            logger.debug("conversation_cache_hit", path=path)
            return events

        validate_file_path(transcript.path, self.projects_dir)
        validate_file_size(transcript.path, self.max_file_size_bytes)

        events = parse_conversation_file(transcript.path)
        self.cache.invalidate_by_prefix(f"{path}:")
        self.cache.set(key, events)
        return events

    def get_conversation(
        self,
        project_path: str | None = None,
        config: FilterConfig | None = None,
        select: EventSelector | None = None,
        empty_message: str | None = None,
    ) -> str:
        """Render a selected, filtered slice of the newest transcript.

        Args:
            project_path: Project directory; defaults to the current directory.
            config: Filter configuration; defaults to the heavy preset.
            select: Optional function choosing the events to render.
            empty_message: Note for the empty document returned when the
                selection is empty. Without it an empty selection renders
                as a conversation with no messages.

        Returns:
            The XML document.

        Raises:
            ClaudistError: If the transcript cannot be read.
            OSError: If the transcript cannot be read.

        """
        transcript = self.find_transcript(project_path)
        if transcript is None:
            return create_empty_conversation_xml(NO_CONVERSATIONS_MESSAGE)

        events: Sequence[TranscriptEvent] = self.load_events(transcript)
        if select is not None:
            events = select(events)
            if not events and empty_message:
                return create_empty_conversation_xml(empty_message)

        filtered = filter_conversation(events, config or resolve_filter_config())
        return to_xml(
            filtered,
            session_id=transcript.session_id,
            project_path=project_path or str(Path.cwd()),
        )

    def get_current_conversation(
        self,
        project_path: str | None = None,
        config: FilterConfig | None = None,
    ) -> str:
        """Render the current conversation without its last user turn.

        The last user event is usually the message that triggered the
        caller, so it and everything after it are left out.

        Args:
            project_path: Project directory; defaults to the current directory.
            config: Filter configuration; defaults to the heavy preset.

        Returns:
            The XML document, or an error document on failure.

        """
        with measure("get_current_conversation"):
            try:
                return self.get_conversation(
                    project_path,
                    config,
                    select=exclude_last_user_message,
                )
            except Exception as e:
                logger.exception("conversation_render_failed", error=str(e))
                return create_error_xml(f"Failed to get current conversation: {e}")

    def get_current_conversation_upto(
        self,
        user_message_index: int,
        project_path: str | None = None,
        config: FilterConfig | None = None,
    ) -> str:
        """Render the conversation before the nth user turn.

        Args:
            user_message_index: 1-based index of the user event to stop at.
            project_path: Project directory; defaults to the current directory.
            config: Filter configuration; defaults to the heavy preset.

        Returns:
            The XML document, or an error document on failure.

        """
        with measure("get_current_conversation_upto"):
            if user_message_index <= 0:
                return create_empty_conversation_xml(INVALID_INDEX_MESSAGE)

            try:
                return self.get_conversation(
                    project_path,
                    config,
                    select=lambda events: get_up_to_user_message(
                        events, user_message_index
                    ),
                    empty_message=(
                        f"No messages found before user message {user_message_index}"
                    ),
                )
            except Exception as e:
                logger.exception(
                    "conversation_render_failed",
                    user_message_index=user_message_index,
                    error=str(e),
                )
                return create_error_xml(
                    f"Failed to get conversation up to user message: {e}"
                )

    def get_conversation_statistics(
        self,
        project_path: str | None = None,
        config: FilterConfig | None = None,
        user_message_index: int | None = None,
    ) -> FilterStatistics:
        """Report what filtering removes from the current conversation.

        Selects the same events as get_current_conversation, or as
        get_current_conversation_upto when ``user_message_index`` is given.

        Args:
            project_path: Project directory; defaults to the current directory.
            config: Filter configuration; defaults to the heavy preset.
            user_message_index: Optional 1-based user turn to stop at.

        Returns:
            Statistics for the selected events.

        Raises:
            TranscriptError: If the project has no transcript.

        """
        transcript = self.find_transcript(project_path)
        if transcript is None:
            raise TranscriptError(NO_CONVERSATIONS_MESSAGE)

        events = self.load_events(transcript)
        if user_message_index is None:
            selected = exclude_last_user_message(events)
        else:
            selected = get_up_to_user_message(events, user_message_index)

        return get_filter_statistics(selected, config or resolve_filter_config())
