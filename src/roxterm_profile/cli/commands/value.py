"""Get and set command handlers."""

from argparse import Namespace

from roxterm_profile.config.parser import decode_value
from roxterm_profile.exceptions import ValidationError
from roxterm_profile.logger import get_logger, temporary_console_level
from roxterm_profile.types import Domain

from .base import BaseCommandHandler

logger = get_logger(__name__)


class GetHandler(BaseCommandHandler):
    """Print a single value."""

    def execute(self, args: Namespace) -> None:
        domain = self.domain_for(args.type)
        value = self.profile.get(domain, args.key)
        with temporary_console_level("INFO"):
            logger.info("%s", self.format_value(domain, value))


class SetHandler(BaseCommandHandler):
    """Store a single value."""

    def execute(self, args: Namespace) -> None:
        domain = self.domain_for(args.type)
        value = self._parse_value(domain, args.value)
        if not self.profile.set(domain, args.key, value):
            self.report_save_failure()
        logger.debug(
            "Set %s.%s in profile '%s'",
            domain.section,
            args.key,
            self.profile.name,
        )

    @staticmethod
    def _parse_value(domain: Domain, text: str):
        """Parse command-line text; text values are taken literally."""
        if domain is Domain.TEXT:
            return text
        try:
            return decode_value(domain, text)
        except ValueError as e:
            raise ValidationError(str(e), target=text) from e
