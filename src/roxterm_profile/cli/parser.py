"""CLI argument parser for roxterm-profile.

Handles parsing of command-line arguments and provides a clean
interface for defining CLI commands and their options.
"""

import argparse
from argparse import Namespace
from collections.abc import Sequence

from roxterm_profile.constants import DEFAULT_PROFILE_NAME

# CLI spelling of each value domain
VALUE_TYPES = ("string", "int", "boolean", "float")


class CLIParser:
    """Command-line argument parser for roxterm-profile."""

    def __init__(self, default_profile: str = DEFAULT_PROFILE_NAME) -> None:
        """Initialize the CLI parser.

        Args:
            default_profile: Profile used when --profile is not given

        """
        self.default_profile = default_profile

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Namespace: Parsed arguments namespace.

        """
        parser = self._create_main_parser()
        self._add_global_options(parser)
        self._add_subcommands(parser)
        return parser.parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog="roxterm-profile",
            description="Inspect and edit roxterm terminal profiles",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Read and write values
  %(prog)s get string font
  %(prog)s --profile Work set int scrollback_lines 5000
  %(prog)s set boolean audible_bell false

  # Show every value and where the profile is stored
  %(prog)s show
  %(prog)s path

  # Copy a profile
  %(prog)s export --output default.json
  %(prog)s --profile Copy import default.json

  # Check a search expression
  %(prog)s search --regex 'err(or)?'
            """,
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        """Add --version and --profile to the main parser."""
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show roxterm-profile version and exit",
        )
        parser.add_argument(
            "--profile",
            "-p",
            default=self.default_profile,
            help=f"Profile name (default: {self.default_profile})",
        )

    def _add_subcommands(self, parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )

        self._add_get_command(subparsers)
        self._add_set_command(subparsers)
        self._add_show_command(subparsers)
        self._add_path_command(subparsers)
        self._add_export_command(subparsers)
        self._add_import_command(subparsers)
        self._add_search_command(subparsers)

    def _add_get_command(self, subparsers) -> None:
        get_parser = subparsers.add_parser(
            "get", help="Print one value from the profile"
        )
        get_parser.add_argument("type", choices=VALUE_TYPES)
        get_parser.add_argument("key")

    def _add_set_command(self, subparsers) -> None:
        set_parser = subparsers.add_parser(
            "set",
            help="Store one value in the profile",
            epilog="Booleans accept true/false or 1/0.",
        )
        set_parser.add_argument("type", choices=VALUE_TYPES)
        set_parser.add_argument("key")
        set_parser.add_argument("value")

    def _add_show_command(self, subparsers) -> None:
        subparsers.add_parser("show", help="Print every value in the profile")

    def _add_path_command(self, subparsers) -> None:
        subparsers.add_parser(
            "path", help="Print where the profile is read from and saved to"
        )

    def _add_export_command(self, subparsers) -> None:
        export_parser = subparsers.add_parser(
            "export", help="Write the profile as a JSON document"
        )
        export_parser.add_argument(
            "--output",
            "-o",
            help="File to write (default: standard output)",
        )

    def _add_import_command(self, subparsers) -> None:
        import_parser = subparsers.add_parser(
            "import", help="Apply values from a JSON document"
        )
        import_parser.add_argument("file", help="Document made by export")

    def _add_search_command(self, subparsers) -> None:
        search_parser = subparsers.add_parser(
            "search", help="Validate search parameters"
        )
        search_parser.add_argument("pattern")
        search_parser.add_argument(
            "--match-case", action="store_true", help="Case sensitive"
        )
        search_parser.add_argument(
            "--entire-word",
            action="store_true",
            help="Only match whole words",
        )
        search_parser.add_argument(
            "--regex",
            action="store_true",
            help="Treat the pattern as a regular expression",
        )
        search_parser.add_argument(
            "--forwards",
            action="store_true",
            help="Search forwards instead of backwards",
        )
        search_parser.add_argument(
            "--no-wrap",
            action="store_true",
            help="Stop at the end of the scrollback",
        )
