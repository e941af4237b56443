"""Logging utilities for roxterm-profile.

This package provides structured logging with:
- Coloured console output (bare messages at INFO for CLI output)
- File rotation using RotatingFileHandler
- QueueHandler/QueueListener so callers never block on log file I/O
- Hierarchical logger naming (roxterm_profile.profile, ...)

Usage:
    >>> from roxterm_profile.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Loaded profile %s", name)  # Use %-style formatting

Environment Variables:
    ROXTERM_PROFILE_LOG_DIR: Directory for the rotating log file
    LOG_LEVEL: Console log level override

Rules for contributors:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers
    4. Never use f-strings in log calls
"""

from roxterm_profile.logger.config import (
    update_logger_levels as _update_levels,
)
from roxterm_profile.logger.formatters import HybridConsoleFormatter
from roxterm_profile.logger.handlers import ConfigurationError
from roxterm_profile.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
    temporary_console_level,
)
from roxterm_profile.logger.state import get_state

__all__ = [
    "ConfigurationError",
    "HybridConsoleFormatter",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "setup_logging",
    "temporary_console_level",
    "update_logger_levels",
]


def update_logger_levels(
    console_level: str | None = None, file_level: str | None = None
) -> None:
    """Update handler levels on the global logger state.

    Example:
        >>> from roxterm_profile.logger import update_logger_levels
        >>> update_logger_levels(console_level="DEBUG")

    """
    _update_levels(get_state(), console_level, file_level)
