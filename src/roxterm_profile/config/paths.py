"""Configuration directory lookup for profile files.

Profiles live at ``<config_base>/roxterm/<name>.ini``. The user's base
directory is searched first, then each system-wide base directory in the
order the platform lists them. Saving always targets the user directory.
"""

import os
from collections.abc import Iterable
from pathlib import Path

from platformdirs import site_config_dir, user_config_path

from roxterm_profile.constants import (
    APP_NAMESPACE,
    DEFAULT_USER_CONFIG_SUBDIR,
    PROFILE_FILE_SUFFIX,
)


class Paths:
    """Platform configuration base directories.

    Locations come from platformdirs, which follows the XDG base directory
    rules on Linux (``$XDG_CONFIG_HOME``, ``$XDG_CONFIG_DIRS``). Relative
    entries are not valid base directories and are dropped.
    """

    @classmethod
    def user_config_base(cls) -> Path:
        """Get the user's configuration base directory.

        Returns:
            The platform user config directory, or ``~/.config`` when the
            environment names a relative path

        """
        path = user_config_path()
        if path.is_absolute():
            return path
        return Path.home() / DEFAULT_USER_CONFIG_SUBDIR

    @classmethod
    def system_config_dirs(cls) -> list[Path]:
        """Get the ordered system configuration base directories.

        Returns:
            Absolute entries of the platform's site config search path

        """
        return [
            Path(entry)
            for entry in site_config_dir(multipath=True).split(os.pathsep)
            if entry and Path(entry).is_absolute()
        ]


class DirectoryResolver:
    """Maps profile names to backing file locations.

    The resolver never creates or modifies anything on disk; directory
    creation is left to the caller that saves.
    """

    def __init__(
        self,
        user_config_base: Path | None = None,
        system_config_dirs: Iterable[Path] | None = None,
        namespace: str = APP_NAMESPACE,
    ) -> None:
        """Initialize resolver.

        Args:
            user_config_base: User base directory
                (defaults to Paths.user_config_base())
            system_config_dirs: Ordered system base directories
                (defaults to Paths.system_config_dirs())
            namespace: Subdirectory used under every base directory

        """
        self.user_config_base = Path(
            user_config_base or Paths.user_config_base()
        )
        if system_config_dirs is None:
            system_config_dirs = Paths.system_config_dirs()
        self.system_config_dirs = tuple(Path(d) for d in system_config_dirs)
        self.namespace = namespace

    def build_filename(self, base: Path, name: str) -> Path:
        """Build ``<base>/<namespace>/<name>.ini``."""
        return Path(base) / self.namespace / f"{name}{PROFILE_FILE_SUFFIX}"

    def user_directory(self) -> Path:
        """Directory that receives saved profiles."""
        return self.user_config_base / self.namespace

    def user_filename(self, name: str) -> Path:
        """Path a profile called ``name`` is saved to."""
        return self.build_filename(self.user_config_base, name)

    def candidates(self, name: str) -> list[Path]:
        """All paths probed for ``name``, in precedence order."""
        bases = (self.user_config_base, *self.system_config_dirs)
        return [self.build_filename(base, name) for base in bases]

    def resolve(self, name: str) -> Path | None:
        """Find the existing backing file for ``name``.

        Args:
            name: Profile name

        Returns:
            The first existing candidate, or None when no directory holds
            a file for the profile

        """
        for candidate in self.candidates(name):
            if candidate.exists():
                return candidate
        return None

    def is_user_file(self, path: Path) -> bool:
        """Whether ``path`` lies in the user profile directory."""
        return Path(path).parent == self.user_directory()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(user_config_base={self.user_config_base!r}, "
            f"system_config_dirs={self.system_config_dirs!r})"
        )
