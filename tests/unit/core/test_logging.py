"""Tests for logging configuration."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path

import pytest

from p2roll.core.exceptions import ConfigurationError
from p2roll.core.logging import bind_context, clear_context, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore the default configuration, closing any log file."""
    yield
    clear_context()
    configure_logging()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_log_file_receives_entries(self, tmp_path: Path) -> None:
        """Test entries above the level reach the log file."""
        log_file = tmp_path / "p2roll.log"
        configure_logging(level="INFO", log_file=log_file)

        get_logger("test").info("Roster saved", count=2)
        get_logger("test").debug("Roll resolved")

        content = log_file.read_text(encoding="utf-8")
        assert "Roster saved" in content
        assert "count=2" in content
        assert "Roll resolved" not in content

    def test_json_format_with_context(self, tmp_path: Path) -> None:
        """Test JSON entries carry the app name and bound context."""
        log_file = tmp_path / "p2roll.log"
        configure_logging(level="DEBUG", json_format=True, log_file=log_file)
        bind_context(command="roll will")

        get_logger("test").debug("Roll resolved", natural=12)

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["event"] == "Roll resolved"
        assert entry["natural"] == 12
        assert entry["app"] == "p2roll"
        assert entry["command"] == "roll will"
        assert entry["level"] == "debug"

    def test_unopenable_log_file(self, tmp_path: Path) -> None:
        """Test a log file in a missing directory is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            configure_logging(log_file=tmp_path / "missing" / "p2roll.log")

        assert exc_info.value.details["config_key"] == "log_file"

    def test_default_level_hides_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the default WARNING level keeps routine entries quiet."""
        configure_logging()

        get_logger("test").info("Character added")
        get_logger("test").warning("Roster looks odd")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Character added" not in captured.err
        assert "Roster looks odd" in captured.err
