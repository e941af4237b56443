"""Process-wide table of shared profiles.

Two Profile objects with the same name would each keep their own copy of
the values and overwrite each other's file. The registry hands out one
shared, reference-counted instance per name instead.

Usage:
    >>> from roxterm_profile.registry import profile_registry
    >>> with profile_registry.profile("Default") as profile:
    ...     profile.set_boolean("audible_bell", False)
"""

import threading
from collections.abc import Callable, Generator
from contextlib import contextmanager

from roxterm_profile.config.paths import DirectoryResolver
from roxterm_profile.logger import get_logger
from roxterm_profile.profile import Profile, validate_profile_name

logger = get_logger(__name__)

ProfileFactory = Callable[[str], Profile]


class ProfileRegistry:
    """Reference-counted profiles keyed by name.

    The registry's own table is guarded by a lock; the profiles it hands
    out are still meant for a single thread.
    """

    def __init__(
        self,
        resolver: DirectoryResolver | None = None,
        factory: ProfileFactory | None = None,
    ) -> None:
        """Initialize registry.

        Args:
            resolver: Directory lookup shared by every profile created here
            factory: Callable building a Profile from a name; overrides
                ``resolver`` when given

        """
        self._resolver = resolver
        self._factory = factory or self._default_factory
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[Profile, int]] = {}

    def _default_factory(self, name: str) -> Profile:
        return Profile(name, resolver=self._resolver)

    def acquire(self, name: str) -> Profile:
        """Get the shared profile called ``name``, creating it if needed.

        Creation does not load the profile; loading still waits for the
        first accessor call.

        Raises:
            ValidationError: If the name is invalid

        """
        validate_profile_name(name)
        with self._lock:
            entry = self._entries.get(name)
            if entry is None:
                profile = self._factory(name)
                refcount = 0
                logger.debug("Registered profile '%s'", name)
            else:
                profile, refcount = entry
            self._entries[name] = (profile, refcount + 1)
            return profile

    def release(self, name: str) -> bool:
        """Drop one reference to ``name``.

        Returns:
            True if that was the last reference and the profile was removed

        Raises:
            KeyError: If the name is not registered

        """
        with self._lock:
            profile, refcount = self._entries[name]
            if refcount > 1:
                self._entries[name] = (profile, refcount - 1)
                return False
            del self._entries[name]
            logger.debug("Released profile '%s'", name)
            return True

    def get(self, name: str) -> Profile | None:
        """Shared profile called ``name`` without taking a reference."""
        with self._lock:
            entry = self._entries.get(name)
        return entry[0] if entry else None

    def refcount(self, name: str) -> int:
        with self._lock:
            entry = self._entries.get(name)
        return entry[1] if entry else 0

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @contextmanager
    def profile(self, name: str) -> Generator[Profile, None, None]:
        """Hold a reference to ``name`` for the duration of a block."""
        profile = self.acquire(name)
        try:
            yield profile
        finally:
            self.release(name)


# Default registry used by the command-line interface
profile_registry = ProfileRegistry()
