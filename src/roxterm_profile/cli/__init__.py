"""Command-line interface for roxterm-profile."""

from .parser import CLIParser
from .runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
