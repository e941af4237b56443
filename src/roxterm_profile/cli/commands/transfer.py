"""Export and import command handlers."""

import sys
from argparse import Namespace
from pathlib import Path

from roxterm_profile.exceptions import ValidationError
from roxterm_profile.logger import get_logger, temporary_console_level

from .base import BaseCommandHandler

logger = get_logger(__name__)


class ExportHandler(BaseCommandHandler):
    """Write the profile as JSON to a file or standard output."""

    def execute(self, args: Namespace) -> None:
        data = self.document.export_profile(self.profile)
        if not args.output:
            sys.stdout.buffer.write(data + b"\n")
            sys.stdout.flush()
            return

        output = Path(args.output).expanduser()
        try:
            output.write_bytes(data + b"\n")
        except OSError as e:
            msg = f"cannot write {output}: {e.strerror or e}"
            raise ValidationError(msg, target=self.profile.name) from e
        with temporary_console_level("INFO"):
            logger.info("Exported '%s' to %s", self.profile.name, output)


class ImportHandler(BaseCommandHandler):
    """Apply a JSON document to the profile."""

    def execute(self, args: Namespace) -> None:
        source = Path(args.file).expanduser()
        try:
            data = source.read_bytes()
        except OSError as e:
            msg = f"cannot read {source}: {e.strerror or e}"
            raise ValidationError(msg, target=self.profile.name) from e

        errors_before = len(self.profile.errors)
        applied = self.document.import_profile(self.profile, data)
        if len(self.profile.errors) > errors_before:
            self.report_save_failure()
        with temporary_console_level("INFO"):
            logger.info(
                "Imported %d value(s) into '%s'", applied, self.profile.name
            )
