"""Pytest configuration and shared fixtures for the claudist test suite.

This module provides event factories for building transcripts in memory,
a helper for writing JSONL transcripts into a temporary projects
directory, and isolation of the cached settings and transcript cache.
"""

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from claudist.config.settings import get_settings
from claudist.models.event import TranscriptEvent
from claudist.transcripts.cache import get_global_cache
from claudist.transcripts.file_system import get_project_folder

EventFactory = Callable[..., TranscriptEvent]


@pytest.fixture(autouse=True)
def _isolate_cached_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop cached settings and the global cache around every test.

    Also clears any CLAUDIST_* variables inherited from the environment
    so that tests only see the variables they set themselves.
    """
    for name in list(os.environ):
        if name.startswith("CLAUDIST_"):
            monkeypatch.delenv(name)

    get_settings.cache_clear()
    get_global_cache.cache_clear()
    yield
    get_settings.cache_clear()
    get_global_cache.cache_clear()


@pytest.fixture
def make_event() -> EventFactory:
    """Provide a factory for transcript events with sequential ids.

    Returns:
        A callable taking role, content and optional keyword fields.
    """
    counter = {"n": 0}

    def factory(
        role: str = "user",
        content: Any = "hello",
        *,
        id: str | None = None,
        parent_id: str | None = None,
        timestamp: str | None = None,
        tool_outcome: Any = None,
    ) -> TranscriptEvent:
        counter["n"] += 1
        n = counter["n"]
        return TranscriptEvent(
            id=id or f"evt-{n}",
            parent_id=parent_id,
            timestamp=timestamp or f"2025-01-01T00:00:{n:02d}.000Z",
            role=role,
            content=content,
            tool_outcome=tool_outcome,
        )

    return factory


@pytest.fixture
def tool_call(make_event: EventFactory) -> EventFactory:
    """Provide a factory for assistant events invoking one tool."""

    def factory(name: str, tool_input: Any = None, **kwargs: Any) -> TranscriptEvent:
        item = {
            "type": "tool_use",
            "id": f"toolu-{name}",
            "name": name,
            "input": tool_input if tool_input is not None else {},
        }
        return make_event("assistant", [item], **kwargs)

    return factory


@pytest.fixture
def tool_result(make_event: EventFactory) -> EventFactory:
    """Provide a factory for user events carrying one tool result."""

    def factory(
        output: Any = "ok",
        *,
        tool_use_id: str = "toolu-x",
        is_error: bool | None = None,
        **kwargs: Any,
    ) -> TranscriptEvent:
        item: dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": tool_use_id,
            "content": output,
        }
        if is_error is not None:
            item["is_error"] = is_error
        return make_event("user", [item], **kwargs)

    return factory


@pytest.fixture
def sub_agent_outcome() -> dict[str, Any]:
    """Provide a tool outcome with the shape of a finished sub-agent run."""
    return {
        "content": [{"type": "text", "text": "Found 3 call sites."}],
        "totalDurationMs": 5000,
        "totalTokens": 1000,
        "totalToolUseCount": 3,
    }


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    """Provide an empty projects directory."""
    path = tmp_path / "projects"
    path.mkdir()
    return path


@pytest.fixture
def write_transcript(projects_dir: Path) -> Callable[..., Path]:
    """Provide a helper writing a JSONL transcript for a project.

    Returns:
        A callable taking the project path, the lines to write and an
        optional session id, returning the transcript path.
    """

    def writer(
        project_path: str, lines: list[str], session_id: str = "session-1"
    ) -> Path:
        folder = get_project_folder(project_path, projects_dir)
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / f"{session_id}.jsonl"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return writer
