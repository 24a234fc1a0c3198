"""Unit tests for transcript discovery."""

import os
from pathlib import Path

import pytest

from claudist.transcripts.file_system import (
    default_projects_dir,
    find_conversations,
    find_most_recent_conversation,
    get_project_folder,
    read_jsonl_file,
)


class TestGetProjectFolder:
    """Tests for mapping project paths to folders."""

    def test_slashes_become_dashes(self, tmp_path: Path) -> None:
        """Test the folder naming scheme."""
        assert get_project_folder("/home/dev/app", tmp_path) == tmp_path / "-home-dev-app"

    def test_trailing_slash_is_dropped(self, tmp_path: Path) -> None:
        """Test that trailing dashes are stripped."""
        assert get_project_folder("/home/dev/app/", tmp_path) == tmp_path / "-home-dev-app"

    def test_defaults_to_current_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that the current directory is used when no path is given."""
        monkeypatch.chdir(tmp_path)

        folder = get_project_folder(projects_dir=tmp_path)

        assert folder.name == str(Path.cwd()).replace("/", "-").rstrip("-")

    def test_default_projects_dir(self) -> None:
        """Test the Claude Code transcript location."""
        assert default_projects_dir() == Path.home() / ".claude" / "projects"


class TestFindConversations:
    """Tests for listing transcripts."""

    def test_newest_first(self, tmp_path: Path) -> None:
        """Test ordering by modification time."""
        older = tmp_path / "older.jsonl"
        newer = tmp_path / "newer.jsonl"
        older.write_text("{}\n")
        newer.write_text("{}\n")
        (tmp_path / "notes.txt").write_text("ignored")
        os.utime(older, (1_000_000_000, 1_000_000_000))
        os.utime(newer, (2_000_000_000, 2_000_000_000))

        files = find_conversations(tmp_path)

        assert [f.session_id for f in files] == ["newer", "older"]
        assert files[0].path == newer

    def test_missing_folder(self, tmp_path: Path) -> None:
        """Test that a missing folder lists nothing."""
        assert find_conversations(tmp_path / "absent") == []

    def test_find_most_recent(self, projects_dir: Path, write_transcript) -> None:
        """Test locating the newest transcript of a project."""
        path = write_transcript("/srv/api", ['{"uuid": "x"}'], session_id="abc")

        found = find_most_recent_conversation("/srv/api", projects_dir)

        assert found is not None
        assert found.path == path
        assert found.session_id == "abc"

    def test_find_most_recent_without_transcripts(self, projects_dir: Path) -> None:
        """Test that a project without transcripts yields None."""
        assert find_most_recent_conversation("/srv/none", projects_dir) is None


class TestReadJsonlFile:
    """Tests for reading transcript lines."""

    def test_blank_lines_skipped(self, tmp_path: Path) -> None:
        """Test that blank lines and line endings are dropped."""
        path = tmp_path / "s.jsonl"
        path.write_text('{"a": 1}\r\n\n   \n{"b": 2}\n')

        assert read_jsonl_file(path) == ['{"a": 1}', '{"b": 2}']

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        """Test that a missing file reads as no lines."""
        assert read_jsonl_file(tmp_path / "absent.jsonl") == []
