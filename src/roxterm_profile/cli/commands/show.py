"""Show and path command handlers."""

from argparse import Namespace

from roxterm_profile.logger import get_logger, temporary_console_level
from roxterm_profile.types import Domain

from .base import BaseCommandHandler

logger = get_logger(__name__)


class ShowHandler(BaseCommandHandler):
    """Print every value, section by section."""

    def execute(self, args: Namespace) -> None:  # noqa: ARG002
        with temporary_console_level("INFO"):
            logger.info("Profile: %s", self.profile.name)
            for domain in Domain:
                keys = self.profile.keys(domain)
                if not keys:
                    continue
                logger.info("[%s]", domain.section)
                for key in keys:
                    value = self.profile.get(domain, key)
                    logger.info(
                        "  %s = %s", key, self.format_value(domain, value)
                    )


class PathHandler(BaseCommandHandler):
    """Print where the profile is read from and saved to."""

    def execute(self, args: Namespace) -> None:  # noqa: ARG002
        self.profile.ensure_loaded()
        resolver = self.profile.resolver
        source = self.profile.source_path
        target = self.profile.file_path or resolver.user_filename(
            self.profile.name
        )
        with temporary_console_level("INFO"):
            logger.info("Loaded from: %s", source or "(no file)")
            logger.info("Saved to:    %s", target)
