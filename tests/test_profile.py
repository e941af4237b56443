"""Tests for Profile lifecycle, typed accessors and persistence."""

import math
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from roxterm_profile.config.paths import DirectoryResolver
from roxterm_profile.exceptions import (
    LoadParseError,
    SaveIoError,
    ValidationError,
)
from roxterm_profile.profile import Profile
from roxterm_profile.types import (
    BooleanChanged,
    Domain,
    FloatChanged,
    IntChanged,
    StringChanged,
)


class TestConstruction:
    """Profile identity and construction."""

    def test_construction_does_not_touch_filesystem(
        self, make_profile, user_base: Path
    ) -> None:
        profile = make_profile("Default")
        assert profile.name == "Default"
        assert not profile.is_loaded
        assert profile.file_path is None
        assert not user_base.exists()

    @pytest.mark.parametrize("name", ["", "a/b", "..", ".", "x\x00y"])
    def test_invalid_names_rejected(self, resolver, name: str) -> None:
        with pytest.raises(ValidationError):
            Profile(name, resolver=resolver)

    def test_non_string_name_rejected(self, resolver) -> None:
        with pytest.raises(ValidationError):
            Profile(None, resolver=resolver)  # type: ignore[arg-type]

    def test_name_cannot_be_reassigned(self, make_profile) -> None:
        profile = make_profile("Default")
        with pytest.raises(AttributeError):
            profile.name = "Other"  # type: ignore[misc]
        assert profile.name == "Default"


class TestGetters:
    """Getters on profiles without a backing file."""

    def test_zero_values_without_file(
        self, make_profile, user_base: Path
    ) -> None:
        profile = make_profile()
        assert profile.get_string("font") == ""
        assert profile.get_int("columns") == 0
        assert profile.get_boolean("bell") is False
        assert profile.get_float("alpha") == 0.0
        assert profile.is_loaded
        assert profile.file_path is None
        assert not user_base.exists()

    def test_wrong_type_reads_as_zero(
        self, make_profile, user_base: Path, write_profile_file
    ) -> None:
        write_profile_file(
            user_base,
            "Default",
            "[ints]\ncolumns = eighty\n[booleans]\nbell = maybe\n"
            "[floats]\nalpha = 1,5\n",
        )
        profile = make_profile()
        assert profile.get_int("columns") == 0
        assert profile.get_boolean("bell") is False
        assert profile.get_float("alpha") == 0.0

    def test_domains_do_not_share_keys(self, make_profile) -> None:
        profile = make_profile()
        profile.set_string("size", "large")
        profile.set_int("size", 12)
        assert profile.get_string("size") == "large"
        assert profile.get_int("size") == 12
        assert profile.get_float("size") == 0.0


class TestRoundTrip:
    """set_D followed by get_D returns the value."""

    @pytest.mark.parametrize(
        "value",
        ["", "Monospace 10", "  padded  ", "tab\there", "two\nlines", "a\\b"],
    )
    def test_string(self, make_profile, value: str) -> None:
        profile = make_profile()
        profile.set_string("k", value)
        assert profile.get_string("k") == value
        assert make_profile().get_string("k") == value

    @pytest.mark.parametrize("value", [0, -1, 80, 2**63 - 1, -(2**63)])
    def test_int(self, make_profile, value: int) -> None:
        profile = make_profile()
        profile.set_int("k", value)
        assert profile.get_int("k") == value
        assert make_profile().get_int("k") == value

    @pytest.mark.parametrize("value", [True, False])
    def test_boolean(self, make_profile, value: bool) -> None:
        profile = make_profile()
        profile.set_boolean("k", value)
        assert profile.get_boolean("k") is value
        assert make_profile().get_boolean("k") is value

    @pytest.mark.parametrize(
        "value", [0.1, -2.5e-300, 1 / 3, 1e308, math.inf, -math.inf]
    )
    def test_float_is_bit_exact(self, make_profile, value: float) -> None:
        profile = make_profile()
        profile.set_float("k", value)
        assert profile.get_float("k") == value
        assert make_profile().get_float("k").hex() == value.hex()

    def test_float_nan(self, make_profile) -> None:
        profile = make_profile()
        profile.set_float("k", math.nan)
        assert math.isnan(make_profile().get_float("k"))

    def test_set_float_accepts_int(self, make_profile) -> None:
        profile = make_profile()
        received = []
        profile.subscribe(Domain.FLOAT, received.append)
        profile.set_float("alpha", 1)
        assert profile.get_float("alpha") == 1.0
        assert received == [FloatChanged("alpha", 1.0)]
        assert isinstance(received[0].value, float)

    @pytest.mark.parametrize(
        ("method", "value"),
        [
            ("set_int", "80"),
            ("set_int", True),
            ("set_int", 2**63),
            ("set_boolean", 1),
            ("set_string", 5),
            ("set_float", "1.0"),
            ("set_float", 10**400),
        ],
    )
    def test_wrong_value_type_rejected(
        self, make_profile, method: str, value
    ) -> None:
        profile = make_profile()
        with pytest.raises(ValidationError):
            getattr(profile, method)("k", value)

    @pytest.mark.parametrize("key", ["", "a=b", "[x]", " lead", "#c", "a\nb"])
    def test_invalid_key_rejected(self, make_profile, key: str) -> None:
        profile = make_profile()
        with pytest.raises(ValidationError):
            profile.set_string(key, "value")


class TestLoading:
    """Lazy, memoized loading and directory precedence."""

    def test_load_happens_once(self, make_profile, resolver) -> None:
        profile = make_profile()
        with patch.object(
            DirectoryResolver, "resolve", wraps=resolver.resolve
        ) as resolve:
            profile.get_string("a")
            profile.get_int("b")
            profile.set_boolean("c", True)
            profile.get_boolean("c")
        assert resolve.call_count == 1

    def test_file_not_reread_after_load(
        self, make_profile, user_base: Path, write_profile_file
    ) -> None:
        path = write_profile_file(user_base, "Default", "[strings]\na = 1\n")
        profile = make_profile()
        assert profile.get_string("a") == "1"
        path.write_text("[strings]\na = 2\n", encoding="utf-8")
        assert profile.get_string("a") == "1"

    def test_user_directory_wins(
        self,
        make_profile,
        user_base: Path,
        system_dirs: list[Path],
        write_profile_file,
    ) -> None:
        user_file = write_profile_file(
            user_base, "Default", "[strings]\nfont = user\n"
        )
        write_profile_file(
            system_dirs[0],
            "Default",
            "[strings]\nfont = system\n[ints]\ncolumns = 100\n",
        )
        profile = make_profile()
        assert profile.get_string("font") == "user"
        # No merging with the system file
        assert profile.get_int("columns") == 0
        assert profile.file_path == user_file
        assert profile.source_path == user_file

    def test_system_directories_in_order(
        self, make_profile, system_dirs: list[Path], write_profile_file
    ) -> None:
        write_profile_file(system_dirs[1], "Default", "[ints]\nrows = 2\n")
        first = write_profile_file(
            system_dirs[0], "Default", "[ints]\nrows = 1\n"
        )
        profile = make_profile()
        assert profile.get_int("rows") == 1
        assert profile.source_path == first

    def test_system_file_is_never_written(
        self,
        make_profile,
        user_base: Path,
        system_dirs: list[Path],
        write_profile_file,
    ) -> None:
        system_file = write_profile_file(
            system_dirs[1], "Default", "[ints]\nrows = 24\n"
        )
        profile = make_profile()
        assert profile.get_int("rows") == 24
        assert profile.file_path is None

        assert profile.set_int("columns", 80)

        user_file = user_base / "roxterm" / "Default.ini"
        assert profile.file_path == user_file
        assert system_file.read_text(encoding="utf-8") == "[ints]\nrows = 24\n"
        saved = user_file.read_text(encoding="utf-8")
        assert "rows = 24" in saved
        assert "columns = 80" in saved

    def test_malformed_file_recovers_with_empty_store(
        self, make_profile, user_base: Path, write_profile_file, caplog
    ) -> None:
        write_profile_file(user_base, "Default", "no section header\n")
        profile = make_profile()

        assert profile.get_string("font") == ""
        assert profile.is_loaded
        assert isinstance(profile.last_error, LoadParseError)
        assert any(
            record.levelname == "CRITICAL"
            and "Error loading profile" in record.getMessage()
            for record in caplog.records
        )

    def test_malformed_user_file_backed_up_on_save(
        self, make_profile, user_base: Path, write_profile_file
    ) -> None:
        path = write_profile_file(user_base, "Default", "garbage\n")
        profile = make_profile()
        assert profile.set_int("columns", 80)

        backup = path.with_name("Default.ini.bak")
        assert backup.read_text(encoding="utf-8") == "garbage\n"
        assert path.read_text(encoding="utf-8") == "[ints]\ncolumns = 80\n"


class TestSaving:
    """Write-through persistence."""

    def test_first_set_creates_directory_and_file(
        self, make_profile, user_base: Path
    ) -> None:
        profile = make_profile("Work")
        assert profile.set_int("scrollback_lines", 1000)

        path = user_base / "roxterm" / "Work.ini"
        assert path.is_file()
        assert profile.file_path == path
        assert path.read_text(encoding="utf-8") == (
            "[ints]\nscrollback_lines = 1000\n"
        )

    def test_persistence_across_instances(self, make_profile) -> None:
        first = make_profile()
        first.set_string("foo", "bar")
        del first

        second = make_profile()
        assert second.get_string("foo") == "bar"

    def test_every_setter_rewrites_file(
        self, make_profile, user_base: Path
    ) -> None:
        profile = make_profile()
        path = user_base / "roxterm" / "Default.ini"
        profile.set_string("font", "Mono")
        assert "font = Mono" in path.read_text(encoding="utf-8")
        profile.set_boolean("bell", True)
        text = path.read_text(encoding="utf-8")
        assert "font = Mono" in text
        assert "[booleans]\nbell = true" in text

    def test_file_path_is_stable(self, make_profile) -> None:
        profile = make_profile()
        profile.set_int("a", 1)
        path = profile.file_path
        profile.set_int("b", 2)
        assert profile.file_path == path

    def test_comments_survive_modification(
        self, make_profile, user_base: Path, write_profile_file
    ) -> None:
        path = write_profile_file(
            user_base,
            "Default",
            "# Terminal look\n[strings]\n; the main font\nfont = Mono 9\n",
        )
        profile = make_profile()
        profile.set_string("font", "Mono 12")
        assert path.read_text(encoding="utf-8") == (
            "# Terminal look\n[strings]\n; the main font\nfont = Mono 12\n"
        )

    def test_save_failure_is_reported_not_raised(
        self, tmp_path: Path, system_dirs: list[Path], caplog
    ) -> None:
        # A regular file where the config base directory should be
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("", encoding="utf-8")
        profile = Profile(
            "Default", resolver=DirectoryResolver(blocker, system_dirs)
        )
        received = []
        profile.subscribe(Domain.TEXT, received.append)

        assert profile.set_string("font", "Mono") is False

        assert profile.get_string("font") == "Mono"
        assert received == [StringChanged("font", "Mono")]
        assert isinstance(profile.last_error, SaveIoError)
        assert any(
            record.levelname == "CRITICAL"
            and "Error saving profile" in record.getMessage()
            for record in caplog.records
        )

    def test_write_error_leaves_old_file(
        self, make_profile, user_base: Path
    ) -> None:
        profile = make_profile()
        profile.set_int("a", 1)
        path = profile.file_path

        with patch("roxterm_profile.profile.os.replace") as replace:
            replace.side_effect = OSError(28, "No space left on device")
            assert profile.set_int("a", 2) is False

        assert path.read_text(encoding="utf-8") == "[ints]\na = 1\n"
        assert list(path.parent.glob("*.tmp")) == []
        assert profile.get_int("a") == 2

    def test_edge_whitespace_survives_reload(self, make_profile) -> None:
        values = {
            "nbsp": "Mono\xa011\xa0",
            "ff": "\x0cx",
            "ideo": "\u3000y",
            "mixed": " \t\x0b",
        }
        first = make_profile()
        for key, value in values.items():
            assert first.set_string(key, value)

        second = make_profile()
        assert {key: second.get_string(key) for key in values} == values
        assert second.errors == ()

    def test_continuation_line_file_is_replaced_cleanly(
        self, make_profile, user_base: Path, write_profile_file
    ) -> None:
        path = write_profile_file(
            user_base, "Default", "[strings]\nfont = a\n  b\n"
        )
        first = make_profile()
        assert first.set_int("x", 1)
        assert isinstance(first.errors[0], LoadParseError)
        assert path.with_name("Default.ini.bak").read_text(
            encoding="utf-8"
        ) == "[strings]\nfont = a\n  b\n"

        second = make_profile()
        assert second.get_int("x") == 1
        assert second.errors == ()

    def test_existing_file_mode_is_kept(self, make_profile) -> None:
        profile = make_profile()
        profile.set_int("a", 1)
        profile.file_path.chmod(0o640)

        profile.set_int("a", 2)

        assert stat.S_IMODE(profile.file_path.stat().st_mode) == 0o640

    def test_new_file_mode_follows_umask(self, make_profile) -> None:
        old_umask = os.umask(0o022)
        try:
            profile = make_profile()
            profile.set_int("a", 1)
        finally:
            os.umask(old_umask)

        assert stat.S_IMODE(profile.file_path.stat().st_mode) == 0o644

    def test_clear_errors(self, make_profile, user_base, write_profile_file):
        write_profile_file(user_base, "Default", "bad\n")
        profile = make_profile()
        profile.ensure_loaded()
        assert len(profile.errors) == 1
        profile.clear_errors()
        assert profile.errors == ()
        assert profile.last_error is None


class TestNotification:
    """Typed change events from setters."""

    def test_handlers_called_in_order(self, make_profile) -> None:
        profile = make_profile()
        calls = []
        profile.subscribe(Domain.TEXT, lambda e: calls.append(("h1", e)))
        profile.subscribe(Domain.TEXT, lambda e: calls.append(("h2", e)))

        profile.set_string("k", "v")

        event = StringChanged(key="k", value="v")
        assert calls == [("h1", event), ("h2", event)]

    def test_event_published_after_save(
        self, make_profile, user_base: Path
    ) -> None:
        profile = make_profile()
        path = user_base / "roxterm" / "Default.ini"
        seen = []

        def handler(event):
            seen.append(path.read_text(encoding="utf-8"))

        profile.subscribe(Domain.INTEGER, handler)
        profile.set_int("columns", 132)
        assert seen == ["[ints]\ncolumns = 132\n"]

    def test_each_domain_has_its_own_channel(self, make_profile) -> None:
        profile = make_profile()
        received = {domain: [] for domain in Domain}
        for domain in Domain:
            profile.subscribe(domain, received[domain].append)

        profile.set_string("s", "x")
        profile.set_int("i", 3)
        profile.set_boolean("b", True)
        profile.set_float("f", 0.5)

        assert received[Domain.TEXT] == [StringChanged("s", "x")]
        assert received[Domain.INTEGER] == [IntChanged("i", 3)]
        assert received[Domain.BOOLEAN] == [BooleanChanged("b", True)]
        assert received[Domain.FLOAT] == [FloatChanged("f", 0.5)]

    def test_unsubscribed_handler_not_called(self, make_profile) -> None:
        profile = make_profile()
        received = []
        profile.subscribe(Domain.TEXT, received.append)
        assert profile.unsubscribe(Domain.TEXT, received.append)
        profile.set_string("k", "v")
        assert received == []

    def test_invalid_set_publishes_nothing(self, make_profile) -> None:
        profile = make_profile()
        received = []
        profile.subscribe(Domain.INTEGER, received.append)
        with pytest.raises(ValidationError):
            profile.set_int("k", "nope")  # type: ignore[arg-type]
        assert received == []


class TestSnapshot:
    def test_as_dict_and_keys(self, make_profile) -> None:
        profile = make_profile()
        profile.set_string("font", "Mono")
        profile.set_int("columns", 80)
        profile.set_int("rows", 24)

        assert profile.keys(Domain.INTEGER) == ["columns", "rows"]
        assert profile.has_key(Domain.TEXT, "font")
        assert not profile.has_key(Domain.INTEGER, "font")
        assert profile.as_dict() == {
            "strings": {"font": "Mono"},
            "ints": {"columns": 80, "rows": 24},
            "booleans": {},
            "floats": {},
        }
