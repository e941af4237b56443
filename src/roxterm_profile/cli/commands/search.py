"""Search command handler."""

from argparse import Namespace

from roxterm_profile.logger import get_logger, temporary_console_level
from roxterm_profile.search import SearchFlags

from .base import BaseCommandHandler

logger = get_logger(__name__)


class SearchHandler(BaseCommandHandler):
    """Validate a search pattern the way the search dialog does."""

    def execute(self, args: Namespace) -> None:
        flags = self.flags_from_args(args)
        state = self.profile.apply_search(args.pattern, flags)
        names = [flag.name for flag in SearchFlags if flag in state.flags]
        with temporary_console_level("INFO"):
            logger.info("Pattern: %r", state.pattern)
            logger.info("Flags:   %s", " | ".join(names) or "none")

    @staticmethod
    def flags_from_args(args: Namespace) -> SearchFlags:
        """Build the flag bitmask from command-line switches."""
        flags = SearchFlags(0)
        if args.match_case:
            flags |= SearchFlags.MATCH_CASE
        if args.entire_word:
            flags |= SearchFlags.ENTIRE_WORD
        if args.regex:
            flags |= SearchFlags.AS_REGEX
        if not args.forwards:
            flags |= SearchFlags.BACKWARDS
        if not args.no_wrap:
            flags |= SearchFlags.WRAP
        return flags
