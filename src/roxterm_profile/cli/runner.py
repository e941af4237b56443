"""CLI runner for roxterm-profile.

Orchestrates the execution of CLI commands by routing parsed
arguments to the appropriate command handlers.
"""

from argparse import Namespace
from collections.abc import Sequence

from .. import __version__
from ..exceptions import ProfileError
from ..logger import get_logger, temporary_console_level
from ..profile import Profile
from ..registry import ProfileRegistry, profile_registry
from ..schemas import ProfileDocument
from .commands import (
    BaseCommandHandler,
    ExportHandler,
    GetHandler,
    ImportHandler,
    PathHandler,
    SearchHandler,
    SetHandler,
    ShowHandler,
)
from .parser import CLIParser

logger = get_logger(__name__)

HANDLER_CLASSES: dict[str, type[BaseCommandHandler]] = {
    "get": GetHandler,
    "set": SetHandler,
    "show": ShowHandler,
    "path": PathHandler,
    "export": ExportHandler,
    "import": ImportHandler,
    "search": SearchHandler,
}


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(self, registry: ProfileRegistry | None = None) -> None:
        """Initialize CLI runner with shared dependencies.

        Args:
            registry: Source of shared profiles
                (defaults to the process-wide registry)

        """
        self.registry = (
            registry if registry is not None else profile_registry
        )
        self.parser = CLIParser()
        self.document = ProfileDocument()

    def _create_handler(
        self, command: str, profile: Profile
    ) -> BaseCommandHandler:
        return HANDLER_CLASSES[command](profile, self.document)

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Run the CLI application.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Process exit code

        """
        args = self.parser.parse_args(argv)

        if args.version:
            with temporary_console_level("INFO"):
                logger.info("roxterm-profile %s", __version__)
            return 0

        if not args.command:
            with temporary_console_level("INFO"):
                logger.info("No command given, see --help")
            return 1

        try:
            return self._run_command(args)
        except ProfileError as e:
            logger.error("%s", e)  # noqa: TRY400
            return 1

    def _run_command(self, args: Namespace) -> int:
        with self.registry.profile(args.profile) as profile:
            handler = self._create_handler(args.command, profile)
            logger.debug(
                "Running %s on profile '%s'", args.command, profile.name
            )
            handler.execute(args)
        return 0
