"""Console formatting for roxterm-profile.

Command output (values, paths, exported documents) is logged at INFO and
must print exactly as given. Anything else is a diagnostic and gets a
timestamp, the logger name and a coloured level.
"""

import logging

from roxterm_profile.constants import LOG_COLORS


class HybridConsoleFormatter(logging.Formatter):
    """Bare message for INFO, coloured structured line for other levels.

    Example Output:
        INFO:     "font = Monospace 10"
        CRITICAL: "12:30:45 - roxterm_profile.profile - CRITICAL - ..."

    """

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()

        color = LOG_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        # Restore the plain name so the file handler sees it uncoloured
        levelname = record.levelname
        record.levelname = f"{color}{levelname}{LOG_COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname
