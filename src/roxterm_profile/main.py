"""Main CLI entry point for roxterm-profile.

This module provides the minimal entry point for the command-line
interface, delegating all functionality to the CLI runner.
"""

import sys

from roxterm_profile.cli import CLIRunner
from roxterm_profile.logger import flush_all_handlers, get_logger

logger = get_logger(__name__)


def main() -> None:
    """Run the CLI application and exit with its status."""
    try:
        exit_code = CLIRunner().run()
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        exit_code = 1
    except Exception:
        logger.exception("Unexpected error")
        exit_code = 1
    flush_all_handlers()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
