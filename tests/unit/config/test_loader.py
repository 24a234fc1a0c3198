"""Unit tests for the YAML filter file loader."""

from pathlib import Path

import pytest

from claudist.config.exceptions import ConfigurationError
from claudist.config.filters import get_preset
from claudist.config.loader import load_filter_config, load_filter_file
from claudist.models.enums import ToolCategory


class TestLoadFilterFile:
    """Tests for reading filter files."""

    def test_load_preset_and_overrides(self, tmp_path: Path) -> None:
        """Test a file naming a preset and overriding two axes."""
        path = tmp_path / "filters.yaml"
        path.write_text(
            """
preset: light
content:
  exclude_system_reminders: true
tools:
  exclude_categories: [file_read]
"""
        )

        filter_file = load_filter_file(path)

        assert filter_file.preset == "light"
        assert filter_file.overrides == {
            "content": {"exclude_system_reminders": True},
            "tools": {"exclude_categories": ["file_read"]},
        }

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test FileNotFoundError for a missing file."""
        with pytest.raises(FileNotFoundError):
            load_filter_file(tmp_path / "absent.yaml")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Test that a syntax error becomes a ConfigurationError."""
        path = tmp_path / "broken.yaml"
        path.write_text("preset: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_filter_file(path)

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        """Test that an empty document is rejected."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(ConfigurationError, match="Empty YAML file"):
            load_filter_file(path)

    def test_non_mapping_document_raises(self, tmp_path: Path) -> None:
        """Test that a list at top level is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- light\n- heavy\n")

        with pytest.raises(ConfigurationError, match="expected mapping"):
            load_filter_file(path)

    def test_non_mapping_axis_raises(self, tmp_path: Path) -> None:
        """Test that an axis given as a scalar is rejected."""
        path = tmp_path / "scalar.yaml"
        path.write_text("tools: everything\n")

        with pytest.raises(ConfigurationError, match="Invalid 'tools'"):
            load_filter_file(path)

    def test_non_string_preset_raises(self, tmp_path: Path) -> None:
        """Test that the preset must be a string."""
        path = tmp_path / "preset.yaml"
        path.write_text("preset: 3\n")

        with pytest.raises(ConfigurationError, match="Invalid 'preset'"):
            load_filter_file(path)

    def test_unknown_top_level_keys_are_ignored(self, tmp_path: Path) -> None:
        """Test that unexpected keys do not fail loading."""
        path = tmp_path / "extra.yaml"
        path.write_text("preset: none\ncolour: blue\n")

        assert load_filter_file(path).overrides == {}


class TestLoadFilterConfig:
    """Tests for loading and resolving in one step."""

    def test_file_without_preset_starts_from_heavy(self, tmp_path: Path) -> None:
        """Test that overrides apply on top of the default preset."""
        path = tmp_path / "filters.yml"
        path.write_text("tools:\n  exclude_categories: [file_edit]\n")

        config = load_filter_config(path)

        assert config.sub_agents == get_preset("heavy").sub_agents
        assert config.tools.exclude_categories == [ToolCategory.file_edit]

    def test_bad_values_degrade(self, tmp_path: Path) -> None:
        """Test that invalid field values fall back instead of raising."""
        path = tmp_path / "filters.yaml"
        path.write_text("preset: none\nmessages:\n  max_length: zero\n")

        config = load_filter_config(path)

        assert config.messages.max_length is None
