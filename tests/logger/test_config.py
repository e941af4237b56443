"""Tests for logger configuration module."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pytest import MonkeyPatch

from roxterm_profile.logger import get_logger, temporary_console_level
from roxterm_profile.logger.config import load_log_settings
from roxterm_profile.logger.state import get_state


def test_load_log_settings_with_env_var(monkeypatch: MonkeyPatch) -> None:
    """Test load_log_settings returns test dir when env var is set."""
    test_log_dir = "/tmp/pytest-test-logs"
    monkeypatch.setenv("ROXTERM_PROFILE_LOG_DIR", test_log_dir)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    console_level, file_level, log_path = load_log_settings()

    assert console_level == "WARNING"
    assert file_level == "INFO"
    assert log_path == Path(test_log_dir) / "roxterm-profile.log"


def test_load_log_settings_without_env_var(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """Without an override the log lives under the XDG config home."""
    monkeypatch.delenv("ROXTERM_PROFILE_LOG_DIR", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    _, _, log_path = load_log_settings()

    assert log_path == tmp_path / "roxterm" / "logs" / "roxterm-profile.log"


def test_load_log_settings_with_tilde_in_env_var(
    monkeypatch: MonkeyPatch,
) -> None:
    monkeypatch.setenv("ROXTERM_PROFILE_LOG_DIR", "~/custom-logs")

    _, _, log_path = load_log_settings()

    assert log_path == Path.home() / "custom-logs" / "roxterm-profile.log"
    assert "~" not in str(log_path)


def test_log_level_env_override(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert load_log_settings()[0] == "DEBUG"

    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert load_log_settings()[0] == "WARNING"


def test_temporary_console_level_restores() -> None:
    get_logger(__name__)
    state = get_state()
    assert state.queue_listener is not None
    console = [
        handler
        for handler in state.queue_listener.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, RotatingFileHandler)
    ]
    original = [handler.level for handler in console]

    with temporary_console_level("DEBUG"):
        assert all(handler.level == logging.DEBUG for handler in console)

    assert [handler.level for handler in console] == original
