"""Configuration loading and updating for the logging system.

Log settings come from the environment so that loggers can be created at
import time, before any profile has been opened.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from roxterm_profile.constants import (
    APP_NAMESPACE,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    LOG_DIR_NAME,
    LOG_FILE_NAME,
)

if TYPE_CHECKING:
    from roxterm_profile.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Load default console level, file level, and file path.

    Environment Variable Override:
        ROXTERM_PROFILE_LOG_DIR: Directory for the log file. Tests set this
        to keep their logs out of the user's configuration directory.

        LOG_LEVEL: Console level override
        (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    # Import here to avoid circular dependency with the config package
    from roxterm_profile.config.paths import Paths  # noqa: PLC0415

    console_level = DEFAULT_CONSOLE_LOG_LEVEL
    env_level = os.getenv(ENV_LOG_LEVEL, "").upper()
    if env_level and isinstance(getattr(logging, env_level, None), int):
        console_level = env_level

    env_log_dir = os.getenv(ENV_LOG_DIR)
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = (
            Paths.user_config_base() / APP_NAMESPACE / LOG_DIR_NAME
            / LOG_FILE_NAME
        )

    return console_level, DEFAULT_LOG_LEVEL, log_path


def update_logger_levels(
    state: "_LoggerState",
    console_level: str | None = None,
    file_level: str | None = None,
) -> None:
    """Update handler levels on the running QueueListener.

    Only updates levels, never adds or removes handlers. Unknown level
    names are ignored.

    Args:
        state: Logger state object
        console_level: New console level name, or None to keep it
        file_level: New file level name, or None to keep it

    """
    if state.queue_listener is None:
        return

    for handler in state.queue_listener.handlers:
        if isinstance(handler, RotatingFileHandler):
            level_name = file_level
        elif isinstance(handler, logging.StreamHandler):
            level_name = console_level
        else:
            continue
        if level_name is None:
            continue
        level = getattr(logging, level_name.upper(), None)
        if isinstance(level, int):
            handler.setLevel(level)
