"""Top-level package for roxterm-profile.

Named, persistent, typed configuration profiles for a terminal emulator.

License: GPL-3.0
"""

from importlib.metadata import PackageNotFoundError, version

from roxterm_profile.config.paths import DirectoryResolver, Paths
from roxterm_profile.exceptions import (
    InvalidPatternError,
    LoadParseError,
    ProfileError,
    SaveIoError,
    ValidationError,
)
from roxterm_profile.notifier import ChangeNotifier, HandlerFailure
from roxterm_profile.profile import Profile
from roxterm_profile.registry import ProfileRegistry, profile_registry
from roxterm_profile.search import SearchFlags, SearchState
from roxterm_profile.store import BackingStore
from roxterm_profile.types import (
    BooleanChanged,
    ChangeEvent,
    Domain,
    FloatChanged,
    IntChanged,
    StringChanged,
)

try:
    __version__ = version("roxterm-profile")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"

__all__ = [
    "BackingStore",
    "BooleanChanged",
    "ChangeEvent",
    "ChangeNotifier",
    "DirectoryResolver",
    "Domain",
    "FloatChanged",
    "HandlerFailure",
    "IntChanged",
    "InvalidPatternError",
    "LoadParseError",
    "Paths",
    "Profile",
    "ProfileError",
    "ProfileRegistry",
    "SaveIoError",
    "SearchFlags",
    "SearchState",
    "StringChanged",
    "ValidationError",
    "__version__",
    "profile_registry",
]
