"""Command handlers for the roxterm-profile CLI."""

from .base import BaseCommandHandler
from .search import SearchHandler
from .show import PathHandler, ShowHandler
from .transfer import ExportHandler, ImportHandler
from .value import GetHandler, SetHandler

__all__ = [
    "BaseCommandHandler",
    "ExportHandler",
    "GetHandler",
    "ImportHandler",
    "PathHandler",
    "SearchHandler",
    "SetHandler",
    "ShowHandler",
]
