"""Pytest configuration and fixtures for roxterm-profile tests."""

import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

# Keep test logs out of the real configuration directory; must happen before
# the package creates its first logger.
os.environ.setdefault(
    "ROXTERM_PROFILE_LOG_DIR",
    tempfile.mkdtemp(prefix="roxterm-profile-test-logs-"),
)

from roxterm_profile.config.paths import DirectoryResolver  # noqa: E402
from roxterm_profile.profile import Profile  # noqa: E402


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation so caplog sees package records.

    The package root logger is created with propagate=False in production.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("roxterm_profile"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logging.getLogger(name).propagate = propagate_value


@pytest.fixture(autouse=True)
def isolated_config_dirs(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point HOME and the XDG config variables at a temporary tree.

    Code that falls back to the default resolver then never reaches the
    developer's real configuration directory.
    """
    root = tmp_path_factory.mktemp("isolated-home")
    monkeypatch.setenv("HOME", str(root / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(root / "home" / ".config"))
    monkeypatch.setenv("XDG_CONFIG_DIRS", str(root / "etc" / "xdg"))
    return root


@pytest.fixture
def user_base(tmp_path: Path) -> Path:
    """User configuration base directory (not created)."""
    return tmp_path / "home" / ".config"


@pytest.fixture
def system_dirs(tmp_path: Path) -> list[Path]:
    """Two system configuration base directories, most specific first."""
    return [tmp_path / "etc" / "xdg-local", tmp_path / "etc" / "xdg"]


@pytest.fixture
def resolver(user_base: Path, system_dirs: list[Path]) -> DirectoryResolver:
    return DirectoryResolver(user_base, system_dirs)


@pytest.fixture
def make_profile(resolver: DirectoryResolver) -> Callable[..., Profile]:
    """Factory for profiles using the temporary directories."""

    def _make(name: str = "Default") -> Profile:
        return Profile(name, resolver=resolver)

    return _make


@pytest.fixture
def write_profile_file() -> Callable[[Path, str, str], Path]:
    """Write ``<base>/roxterm/<name>.ini`` with the given text."""

    def _write(base: Path, name: str, text: str) -> Path:
        path = base / "roxterm" / f"{name}.ini"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
