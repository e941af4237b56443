"""Named, persistent, typed terminal profiles.

A Profile is identified by its name alone. Its backing file is found and
read the first time a value is read or written, and every setter rewrites
the whole file before notifying subscribers of the change.

Example:
    >>> profile = Profile("Default")
    >>> profile.subscribe(Domain.TEXT, on_font_change)
    >>> profile.set_string("font", "Monospace 11")
    True
    >>> profile.get_string("font")
    'Monospace 11'

Thread Safety:
    Not thread-safe. Confine each instance to one thread; use
    ProfileRegistry to share one instance per name.
"""

import os
import shutil
import stat
import tempfile
from pathlib import Path

from roxterm_profile.config.paths import DirectoryResolver
from roxterm_profile.constants import FILE_ENCODING, PROFILE_BACKUP_SUFFIX
from roxterm_profile.exceptions import (
    LoadParseError,
    ProfileError,
    SaveIoError,
    ValidationError,
)
from roxterm_profile.logger import get_logger
from roxterm_profile.notifier import ChangeHandler, ChangeNotifier
from roxterm_profile.search import SearchFlags, SearchState, validate_search
from roxterm_profile.store import BackingStore
from roxterm_profile.types import Domain, ProfileSnapshot, Value, make_event

logger = get_logger(__name__)


def validate_profile_name(name: str) -> None:
    """Check that ``name`` can be used as a profile file name.

    Raises:
        ValidationError: If the name is empty or could escape the profile
            directory

    """
    if not isinstance(name, str) or not name:
        msg = "profile name must be a non-empty string"
        raise ValidationError(msg, target=str(name))
    separators = {"/", "\x00", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if separators.intersection(name) or name in {".", ".."}:
        msg = "profile name must not contain path separators"
        raise ValidationError(msg, target=name)


def _file_mode(path: Path) -> int:
    """Permission bits for a rewrite of ``path``.

    An existing file keeps its mode; a new one gets 0666 minus the umask.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class Profile:
    """Typed settings store backed by ``<config>/roxterm/<name>.ini``."""

    def __init__(
        self,
        name: str,
        resolver: DirectoryResolver | None = None,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        """Initialize profile without touching the filesystem.

        Args:
            name: Profile name, fixed for the lifetime of the object
            resolver: Directory lookup (defaults to XDG directories)
            notifier: Change notifier (defaults to a private one)

        Raises:
            ValidationError: If the name is invalid

        """
        validate_profile_name(name)
        self._name = name
        self._resolver = resolver or DirectoryResolver()
        self._notifier = notifier or ChangeNotifier()
        self._store: BackingStore | None = None
        self._file_path: Path | None = None
        self._source_path: Path | None = None
        self._unparsed_path: Path | None = None
        self._errors: list[ProfileError] = []
        self._search = SearchState()

    @property
    def name(self) -> str:
        """Profile name."""
        return self._name

    @property
    def file_path(self) -> Path | None:
        """File the profile is saved to, once known."""
        return self._file_path

    @property
    def source_path(self) -> Path | None:
        """File the profile was loaded from, if any."""
        return self._source_path

    @property
    def resolver(self) -> DirectoryResolver:
        return self._resolver

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    @property
    def is_loaded(self) -> bool:
        """Whether the backing store has been created."""
        return self._store is not None

    @property
    def errors(self) -> tuple[ProfileError, ...]:
        """Load and save failures recorded so far, oldest first."""
        return tuple(self._errors)

    @property
    def last_error(self) -> ProfileError | None:
        return self._errors[-1] if self._errors else None

    def clear_errors(self) -> None:
        self._errors.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"

    # =========================================================================
    # Load / save
    # =========================================================================

    def ensure_loaded(self) -> BackingStore:
        """Create the backing store on first use.

        Loading happens at most once per instance. A file in the user
        directory also becomes the save target; a file found only in a
        system directory is read but never written.

        Returns:
            The profile's backing store

        """
        if self._store is not None:
            return self._store

        path = self._resolver.resolve(self._name)
        if path is None:
            logger.debug("No file for profile '%s', starting empty", self._name)
            self._store = BackingStore()
            return self._store

        is_user_file = self._resolver.is_user_file(path)
        if is_user_file:
            self._file_path = path
        self._source_path = path

        try:
            text = path.read_text(encoding=FILE_ENCODING)
            self._store = BackingStore.loads(text, source=str(path))
        except (OSError, UnicodeDecodeError) as e:
            self._record_load_failure(
                LoadParseError(str(e), target=str(path)), path, is_user_file
            )
        except LoadParseError as e:
            self._record_load_failure(e, path, is_user_file)
        else:
            logger.debug("Loaded profile '%s' from %s", self._name, path)

        if self._store is None:
            self._store = BackingStore()
        return self._store

    def _record_load_failure(
        self, error: LoadParseError, path: Path, is_user_file: bool
    ) -> None:
        logger.critical("Error loading profile from '%s': %s", path, error)
        self._errors.append(error)
        if is_user_file:
            self._unparsed_path = path

    def ensure_saved(self) -> bool:
        """Write the whole store to the profile's file.

        On first save the user profile directory is created and becomes the
        profile's permanent save target.

        Returns:
            True if the file was written; failures are logged and recorded
            in ``errors`` while the in-memory values stay in effect

        """
        store = self.ensure_loaded()
        try:
            if self._file_path is None:
                self._resolver.user_directory().mkdir(
                    parents=True, exist_ok=True
                )
                self._file_path = self._resolver.user_filename(self._name)
            self._backup_unparsed_file()
            self._write_atomically(self._file_path, store.dumps())
        except OSError as e:
            target = str(self._file_path or self._resolver.user_directory())
            error = SaveIoError(str(e), target=target)
            logger.critical("Error saving profile to '%s': %s", target, e)
            self._errors.append(error)
            return False
        return True

    def _backup_unparsed_file(self) -> None:
        """Keep a copy of a file that failed to parse before replacing it."""
        if self._unparsed_path is None:
            return
        backup = self._unparsed_path.with_name(
            self._unparsed_path.name + PROFILE_BACKUP_SUFFIX
        )
        if self._unparsed_path.exists():
            shutil.copy2(self._unparsed_path, backup)
            logger.warning(
                "Unreadable profile file backed up to '%s'", backup
            )
        self._unparsed_path = None

    @staticmethod
    def _write_atomically(path: Path, text: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding=FILE_ENCODING) as f:
                f.write(text)
            # mkstemp creates 0600; keep the mode a plain open() would give
            os.chmod(tmp_name, _file_mode(path))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # =========================================================================
    # Typed access
    # =========================================================================

    def get(self, domain: Domain, key: str) -> Value:
        """Read ``key`` from ``domain``; the zero value if absent."""
        return self.ensure_loaded().get(domain, key)

    def set(self, domain: Domain, key: str, value: Value) -> bool:
        """Write ``key`` in ``domain``, save, then notify subscribers.

        Returns:
            Whether the change reached the file

        Raises:
            ValidationError: If the key or value is invalid for the domain

        """
        store = self.ensure_loaded()
        store.set(domain, key, value)
        if domain is Domain.FLOAT and isinstance(value, int):
            value = float(value)
        saved = self.ensure_saved()
        self._notifier.publish(make_event(domain, key, value))
        return saved

    def get_string(self, key: str) -> str:
        return self.get(Domain.TEXT, key)  # type: ignore[return-value]

    def set_string(self, key: str, value: str) -> bool:
        return self.set(Domain.TEXT, key, value)

    def get_int(self, key: str) -> int:
        return self.get(Domain.INTEGER, key)  # type: ignore[return-value]

    def set_int(self, key: str, value: int) -> bool:
        return self.set(Domain.INTEGER, key, value)

    def get_boolean(self, key: str) -> bool:
        return self.get(Domain.BOOLEAN, key)  # type: ignore[return-value]

    def set_boolean(self, key: str, value: bool) -> bool:  # noqa: FBT001
        return self.set(Domain.BOOLEAN, key, value)

    def get_float(self, key: str) -> float:
        return self.get(Domain.FLOAT, key)  # type: ignore[return-value]

    def set_float(self, key: str, value: float) -> bool:
        return self.set(Domain.FLOAT, key, value)

    def has_key(self, domain: Domain, key: str) -> bool:
        return self.ensure_loaded().has_key(domain, key)

    def keys(self, domain: Domain) -> list[str]:
        return self.ensure_loaded().keys(domain)

    def as_dict(self) -> ProfileSnapshot:
        """Decoded copy of every section."""
        return self.ensure_loaded().as_dict()

    # =========================================================================
    # Notification
    # =========================================================================

    def subscribe(self, channel: Domain, handler: ChangeHandler) -> None:
        self._notifier.subscribe(channel, handler)

    def unsubscribe(self, channel: Domain, handler: ChangeHandler) -> bool:
        return self._notifier.unsubscribe(channel, handler)

    # =========================================================================
    # Search parameters
    # =========================================================================

    def apply_search(self, pattern: str, flags: int) -> SearchState:
        """Validate and remember search parameters from the search dialog.

        Raises:
            InvalidPatternError: If AS_REGEX is set and the pattern does not
                compile, or the flags hold unknown bits. The previous search
                state is kept.

        """
        self._search = validate_search(pattern, flags)
        logger.debug(
            "Search for profile '%s' set to %r (%s)",
            self._name,
            pattern,
            self._search.flags,
        )
        return self._search

    def get_search_pattern(self) -> str | None:
        return self._search.pattern

    def get_search_flags(self) -> SearchFlags:
        return self._search.flags
