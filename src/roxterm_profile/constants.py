"""Centralized constants module for roxterm-profile.

This module serves as the single source of truth for all shared constants
across the roxterm-profile codebase. Constants are organized by logical
categories and use typing.Final annotations to ensure immutability.

Usage:
    from roxterm_profile.constants import APP_NAMESPACE
"""

from typing import Final

# =============================================================================
# Profile Location Constants
# =============================================================================

# Subdirectory created under every XDG configuration base directory
APP_NAMESPACE: Final[str] = "roxterm"

# Extension of profile backing files (<name>.ini)
PROFILE_FILE_SUFFIX: Final[str] = ".ini"

# Suffix appended to a malformed profile file before it is overwritten
PROFILE_BACKUP_SUFFIX: Final[str] = ".bak"

# Name used when no profile is requested explicitly
DEFAULT_PROFILE_NAME: Final[str] = "Default"

# User config base when the environment names a relative path
DEFAULT_USER_CONFIG_SUBDIR: Final[str] = ".config"

# =============================================================================
# Backing Store Constants
# =============================================================================

SECTION_STRINGS: Final[str] = "strings"
SECTION_INTS: Final[str] = "ints"
SECTION_BOOLEANS: Final[str] = "booleans"
SECTION_FLOATS: Final[str] = "floats"

# Lines starting with one of these prefixes are comments
COMMENT_PREFIXES: Final[tuple[str, ...]] = ("#", ";")

# Characters that cannot appear in a key
FORBIDDEN_KEY_CHARS: Final[frozenset[str]] = frozenset("=[]\n\r")

# Integers are stored as signed 64-bit values
INT_MIN: Final[int] = -(2**63)
INT_MAX: Final[int] = 2**63 - 1

BOOLEAN_TRUE: Final[str] = "true"
BOOLEAN_FALSE: Final[str] = "false"
BOOLEAN_STATES: Final[dict[str, bool]] = {
    "true": True,
    "1": True,
    "false": False,
    "0": False,
}

FILE_ENCODING: Final[str] = "utf-8"

# =============================================================================
# Logging Constants
# =============================================================================

ENV_LOG_DIR: Final[str] = "ROXTERM_PROFILE_LOG_DIR"
ENV_LOG_LEVEL: Final[str] = "LOG_LEVEL"

ROOT_LOGGER_NAME: Final[str] = "roxterm_profile"
LOG_FILE_NAME: Final[str] = "roxterm-profile.log"
LOG_DIR_NAME: Final[str] = "logs"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"

# Maximum size for rotated log files (bytes)
LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB

# Number of rotated log files to keep
LOG_BACKUP_COUNT: Final[int] = 3

# Console and file format strings used by the logger
LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Color mapping for console output levels
LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# =============================================================================
# Import/Export Constants
# =============================================================================

EXPORT_KEY_NAME: Final[str] = "name"
