"""Unit tests for the CLI entry point and commands."""

import json
import xml.etree.ElementTree as ET
from argparse import Namespace
from pathlib import Path

import pytest

from claudist.cli.commands import ShowConversationCommand, ShowStatisticsCommand
from claudist.cli.main import CommandDispatcher, main
from claudist.config.exceptions import ConfigurationError
from claudist.config.filters import get_preset
from claudist.config.settings import Settings
from claudist.models.enums import ToolCategory
from tests.fixtures import load_fixture_lines

PROJECT = "/home/dev/app"


@pytest.fixture
def sample_transcript(write_transcript) -> Path:
    """Write the sample session for PROJECT."""
    return write_transcript(PROJECT, load_fixture_lines("sample_session.jsonl"))


def _ids(output: str) -> list[str]:
    return [m.get("uuid") for m in ET.fromstring(output).iter("message")]


class TestBuildFilterConfig:
    """Tests for resolving filter settings from all sources."""

    def _args(self, **kwargs) -> Namespace:
        defaults = {
            "preset": None,
            "config": None,
            "exclude_tools": None,
            "exclude_categories": None,
            "exclude_reminders": None,
            "max_length": None,
        }
        return Namespace(**{**defaults, **kwargs})

    def test_defaults_to_heavy(self) -> None:
        """Test the default preset."""
        command = ShowConversationCommand(Settings())

        assert command.build_filter_config(self._args()) == get_preset("heavy")

    def test_environment_preset_and_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that CLAUDIST_* variables are applied."""
        monkeypatch.setenv("CLAUDIST_FILTER_PRESET", "none")
        monkeypatch.setenv("CLAUDIST_EXCLUDE_FAILED_TOOLS", "true")
        command = ShowConversationCommand(Settings())

        config = command.build_filter_config(self._args())

        assert config.content.exclude_thinking is False
        assert config.tools.exclude_failed is True

    def test_precedence(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test flag over file over environment."""
        monkeypatch.setenv("CLAUDIST_FILTER_PRESET", "none")
        monkeypatch.setenv("CLAUDIST_EXCLUDE_TOOLS", "Bash")
        monkeypatch.setenv("CLAUDIST_MAX_MESSAGE_LENGTH", "50")
        config_file = tmp_path / "filters.yaml"
        config_file.write_text(
            "preset: light\n"
            "tools:\n  exclude_specific: [Read]\n"
            "messages:\n  max_length: 80\n"
        )
        command = ShowConversationCommand(Settings())

        config = command.build_filter_config(
            self._args(config=str(config_file), max_length=120, exclude_categories=["web"])
        )

        assert config.content.exclude_thinking is True
        assert config.sub_agents.exclude_calls is False
        assert config.tools.exclude_specific == ["Read"]
        assert config.tools.exclude_categories == [ToolCategory.web]
        assert config.messages.max_length == 120

    def test_preset_flag_wins(self, tmp_path: Path) -> None:
        """Test --preset over the file's preset."""
        config_file = tmp_path / "filters.yaml"
        config_file.write_text("preset: light\n")
        command = ShowConversationCommand(Settings())

        config = command.build_filter_config(self._args(preset="none", config=str(config_file)))

        assert config == get_preset("none")

    def test_malformed_file_raises(self, tmp_path: Path) -> None:
        """Test that structural problems in the file surface."""
        config_file = tmp_path / "filters.yaml"
        config_file.write_text("- not a mapping\n")
        command = ShowConversationCommand(Settings())

        with pytest.raises(ConfigurationError):
            command.build_filter_config(self._args(config=str(config_file)))


class TestMain:
    """Tests for the claudist entry point."""

    def test_prints_current_conversation(
        self,
        projects_dir: Path,
        sample_transcript: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test the default command."""
        exit_code = main(["--projects-dir", str(projects_dir), "--project", PROJECT])

        assert exit_code == 0
        assert _ids(capsys.readouterr().out) == ["u-1", "a-1", "a-3", "u-3", "a-4", "u-4", "a-5"]

    def test_upto_with_flags(
        self,
        projects_dir: Path,
        sample_transcript: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test --upto together with filter flags."""
        exit_code = main(
            [
                "--projects-dir", str(projects_dir),
                "--project", PROJECT,
                "--upto", "5",
                "--preset", "none",
                "--exclude-tools", "Edit",
            ]
        )

        assert exit_code == 0
        assert _ids(capsys.readouterr().out) == ["u-1", "a-1", "a-2", "u-2", "a-4", "u-4", "a-5"]

    def test_stats_as_json(
        self,
        projects_dir: Path,
        sample_transcript: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test --stats --json."""
        exit_code = main(
            ["--projects-dir", str(projects_dir), "--project", PROJECT, "--stats", "--json"]
        )

        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert data["total"] == 9
        assert data["filtered"] == 2
        assert data["byCategory"]["subAgentResponses"] == 1
        assert data["tokensSaved"] == 4450

    def test_stats_without_transcript(
        self, projects_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that missing transcripts fail the stats command."""
        exit_code = main(["--projects-dir", str(projects_dir), "--project", "/x", "--stats"])

        assert exit_code == 1
        assert "No conversations found" in capsys.readouterr().err

    def test_conversation_without_transcript_succeeds(
        self, projects_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that an empty document is a successful result."""
        exit_code = main(["--projects-dir", str(projects_dir), "--project", "/x"])

        root = ET.fromstring(capsys.readouterr().out)
        assert exit_code == 0
        assert root.find("metadata").findtext("note") == "No conversations found for this project"

    def test_error_document_exit_code(
        self,
        projects_dir: Path,
        sample_transcript: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that an error document is printed with exit code 1."""
        monkeypatch.setenv("CLAUDIST_MAX_FILE_SIZE_BYTES", "10")

        exit_code = main(["--projects-dir", str(projects_dir), "--project", PROJECT])

        assert exit_code == 1
        assert ET.fromstring(capsys.readouterr().out).tag == "error"

    def test_invalid_arguments(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that validation errors exit with 1."""
        exit_code = main(["--config", "absent.yaml"])

        assert exit_code == 1
        assert "Filter file not found" in capsys.readouterr().err

    def test_malformed_config_file(
        self, tmp_path: Path, projects_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a broken filter file is reported."""
        config_file = tmp_path / "filters.yaml"
        config_file.write_text("preset: [broken\n")

        exit_code = main(["--projects-dir", str(projects_dir), "--config", str(config_file)])

        assert exit_code == 1
        assert "Failed to parse YAML" in capsys.readouterr().err

    def test_keyboard_interrupt(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that Ctrl-C exits with 130."""

        def interrupted(self, args: Namespace) -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(CommandDispatcher, "dispatch", interrupted)

        assert main([]) == 130
        assert "Interrupted" in capsys.readouterr().err


class TestCommandDispatcher:
    """Tests for command selection."""

    def test_stats_flag_selects_stats_command(
        self,
        projects_dir: Path,
        sample_transcript: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that --stats prints text statistics."""
        args = Namespace(projects_dir=str(projects_dir), project=PROJECT, stats=True, json_output=False)

        exit_code = CommandDispatcher(Settings()).dispatch(args)

        assert exit_code == 0
        assert "Filter Statistics" in capsys.readouterr().out

    def test_command_names(self) -> None:
        """Test the command names used in logs."""
        assert ShowConversationCommand(Settings()).name == "conversation"
        assert ShowStatisticsCommand(Settings()).name == "stats"
