"""Tests for logging settings parsing."""

import logging
from pathlib import Path

from backplan.logging_settings import parse_logging_settings


def test_parse_logging_settings_with_retention(tmp_path: Path) -> None:
    """Test parsing logging settings with retention_hours."""
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text(
        """
# Test config
terminal = debug
file = warning
retention_hours = 72
"""
    )

    settings = parse_logging_settings(config_file)

    assert settings.terminal_level == 10  # DEBUG
    assert settings.file_level == 30  # WARNING
    assert settings.retention_hours == 72


def test_parse_logging_settings_defaults(tmp_path: Path) -> None:
    """Test default values when config file doesn't exist."""
    settings = parse_logging_settings(tmp_path / "nonexistent.conf")

    assert settings.terminal_level == 20  # Default INFO
    assert settings.file_level == 20  # Default INFO
    assert settings.retention_hours == 48  # Default retention


def test_parse_logging_settings_records_mistakes(tmp_path: Path) -> None:
    """Bad lines keep the previous value and are listed as problems."""
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text(
        """verbose
sessions = debug
terminal = loud
FILE = Error
"""
    )

    settings = parse_logging_settings(config_file)

    assert settings.terminal_level == 20  # Unknown level keeps INFO
    assert settings.file_level == 40  # ERROR, key is case-insensitive
    assert len(settings.problems) == 3
    assert settings.problems[0].startswith("logging_settings.conf:1: expected 'key = value'")
    assert "unknown key 'sessions'" in settings.problems[1]
    assert "unknown level 'loud'" in settings.problems[2]
    assert settings.problems[2].startswith("logging_settings.conf:3:")


def test_parse_logging_settings_clean_file_has_no_problems(tmp_path: Path) -> None:
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text("# comment\n\nterminal = warning\n")

    assert parse_logging_settings(config_file).problems == ()


def test_parse_logging_settings_file_prefix(tmp_path: Path) -> None:
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text("file_prefix = planner-ops\n")

    assert parse_logging_settings(config_file).file_prefix == "planner-ops"
    assert parse_logging_settings(tmp_path / "missing.conf").file_prefix == "backplan"


def test_parse_logging_settings_rejects_unsafe_prefix(tmp_path: Path) -> None:
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text("file_prefix = ../escape\n")

    settings = parse_logging_settings(config_file)

    assert settings.file_prefix == "backplan"
    assert "file_prefix may only contain" in settings.problems[0]


def test_report_logs_each_problem(tmp_path: Path, caplog) -> None:
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text("terminal = chatty\nretention_hours = soon\n")
    settings = parse_logging_settings(config_file)

    with caplog.at_level(logging.WARNING, logger="backplan.logging"):
        settings.report(logging.getLogger("backplan.logging"))

    assert [record.levelno for record in caplog.records] == [logging.WARNING] * 2
    assert "unknown level 'chatty'" in caplog.records[0].getMessage()
    assert "retention_hours must be a whole number" in caplog.records[1].getMessage()


def test_parse_logging_settings_invalid_retention(tmp_path: Path) -> None:
    """Test parsing with invalid retention value falls back to default."""
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text("retention_hours = invalid\n")

    assert parse_logging_settings(config_file).retention_hours == 48


def test_parse_logging_settings_negative_retention(tmp_path: Path) -> None:
    """Test parsing with negative retention value clamps to 0."""
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text("retention_hours = -10\n")

    assert parse_logging_settings(config_file).retention_hours == 0


def test_parse_logging_settings_off_level(tmp_path: Path) -> None:
    """Test parsing with 'off' level."""
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text("terminal = off\nfile = info\n")

    settings = parse_logging_settings(config_file)

    assert settings.terminal_level is None
    assert settings.file_level == 20  # INFO
