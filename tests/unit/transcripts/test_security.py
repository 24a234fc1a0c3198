"""Unit tests for transcript access checks."""

from pathlib import Path

import pytest

from claudist.transcripts.exceptions import TranscriptAccessError
from claudist.transcripts.security import validate_file_path, validate_file_size


class TestValidateFilePath:
    """Tests for directory containment."""

    def test_file_inside_base(self, tmp_path: Path) -> None:
        """Test that contained files pass."""
        validate_file_path(tmp_path / "proj" / "s.jsonl", tmp_path)

    def test_traversal_rejected(self, tmp_path: Path) -> None:
        """Test that .. segments cannot escape the base."""
        base = tmp_path / "projects"
        base.mkdir()

        with pytest.raises(TranscriptAccessError, match="Access denied"):
            validate_file_path(base / ".." / "secret.jsonl", base)

    def test_symlink_escape_rejected(self, tmp_path: Path) -> None:
        """Test that symlinks are resolved before the check."""
        base = tmp_path / "projects"
        base.mkdir()
        outside = tmp_path / "outside.jsonl"
        outside.write_text("{}")
        link = base / "link.jsonl"
        link.symlink_to(outside)

        with pytest.raises(TranscriptAccessError):
            validate_file_path(link, base)


class TestValidateFileSize:
    """Tests for the size limit."""

    def test_small_file_passes(self, tmp_path: Path) -> None:
        """Test a file under the limit."""
        path = tmp_path / "s.jsonl"
        path.write_text("x" * 10)

        validate_file_size(path, max_bytes=10)

    def test_large_file_rejected(self, tmp_path: Path) -> None:
        """Test a file over the limit."""
        path = tmp_path / "s.jsonl"
        path.write_text("x" * 11)

        with pytest.raises(TranscriptAccessError, match="File too large: 11 bytes"):
            validate_file_size(path, max_bytes=10)

    def test_missing_file_passes(self, tmp_path: Path) -> None:
        """Test that a missing file is left to the reader."""
        validate_file_size(tmp_path / "absent.jsonl", max_bytes=1)
