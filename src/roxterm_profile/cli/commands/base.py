"""Base command handler for roxterm-profile CLI commands.

This module provides the abstract base class that all command handlers
inherit from, ensuring a consistent interface across commands.
"""

from abc import ABC, abstractmethod
from argparse import Namespace

from roxterm_profile.exceptions import ValidationError
from roxterm_profile.logger import get_logger
from roxterm_profile.profile import Profile
from roxterm_profile.schemas import ProfileDocument
from roxterm_profile.types import Domain

logger = get_logger(__name__)

DOMAIN_BY_TYPE: dict[str, Domain] = {
    "string": Domain.TEXT,
    "int": Domain.INTEGER,
    "boolean": Domain.BOOLEAN,
    "float": Domain.FLOAT,
}


class BaseCommandHandler(ABC):
    """Abstract base class for all command handlers.

    CLIRunner acts as the composition root, creating the profile and
    document converter and injecting them into every handler.
    """

    def __init__(
        self,
        profile: Profile,
        document: ProfileDocument | None = None,
    ) -> None:
        """Initialize the command handler with shared dependencies.

        Args:
            profile: Profile the command operates on
            document: JSON import/export converter

        """
        self.profile = profile
        self.document = document or ProfileDocument()

    @abstractmethod
    def execute(self, args: Namespace) -> None:
        """Execute the command with the given arguments.

        Raises:
            ProfileError: If the command cannot be completed

        """

    @staticmethod
    def domain_for(type_name: str) -> Domain:
        """Map a CLI value type to its domain."""
        try:
            return DOMAIN_BY_TYPE[type_name]
        except KeyError:
            msg = f"unknown value type: {type_name}"
            raise ValidationError(msg) from None

    @staticmethod
    def format_value(domain: Domain, value: object) -> str:
        """Render a value the way it is typed on the command line."""
        if domain is Domain.BOOLEAN:
            return "true" if value else "false"
        return str(value)

    def report_save_failure(self) -> None:
        """Raise the profile's latest save error after a failed write."""
        error = self.profile.last_error
        if error is not None:
            raise error
