"""Tests for XDG directory defaults and profile file resolution."""

from pathlib import Path

from pytest import MonkeyPatch

from roxterm_profile.config.paths import DirectoryResolver, Paths


class TestPaths:
    def test_user_config_base_from_env(
        self, monkeypatch: MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert Paths.user_config_base() == tmp_path

    def test_relative_config_home_ignored(
        self, monkeypatch: MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", "relative/dir")
        assert Paths.user_config_base() == Path.home() / ".config"

    def test_user_config_base_default(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert Paths.user_config_base() == Path.home() / ".config"

    def test_system_config_dirs_from_env(
        self, monkeypatch: MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_DIRS", "/opt/xdg::relative:/etc/xdg")
        assert Paths.system_config_dirs() == [
            Path("/opt/xdg"),
            Path("/etc/xdg"),
        ]

    def test_system_config_dirs_default(
        self, monkeypatch: MonkeyPatch
    ) -> None:
        monkeypatch.delenv("XDG_CONFIG_DIRS", raising=False)
        assert Paths.system_config_dirs() == [Path("/etc/xdg")]


class TestDirectoryResolver:
    def test_build_filename(self, resolver: DirectoryResolver) -> None:
        assert resolver.build_filename(Path("/base"), "Work") == Path(
            "/base/roxterm/Work.ini"
        )

    def test_user_filename(
        self, resolver: DirectoryResolver, user_base: Path
    ) -> None:
        assert resolver.user_directory() == user_base / "roxterm"
        assert resolver.user_filename("Default") == (
            user_base / "roxterm" / "Default.ini"
        )

    def test_candidates_order(
        self,
        resolver: DirectoryResolver,
        user_base: Path,
        system_dirs: list[Path],
    ) -> None:
        assert resolver.candidates("P") == [
            user_base / "roxterm" / "P.ini",
            system_dirs[0] / "roxterm" / "P.ini",
            system_dirs[1] / "roxterm" / "P.ini",
        ]

    def test_resolve_nothing(
        self, resolver: DirectoryResolver, user_base: Path
    ) -> None:
        assert resolver.resolve("Default") is None
        # Resolution never creates directories
        assert not user_base.exists()

    def test_resolve_prefers_user_file(
        self,
        resolver: DirectoryResolver,
        user_base: Path,
        system_dirs: list[Path],
        write_profile_file,
    ) -> None:
        write_profile_file(system_dirs[0], "Default", "")
        user_file = write_profile_file(user_base, "Default", "")
        assert resolver.resolve("Default") == user_file
        assert resolver.is_user_file(user_file)

    def test_resolve_falls_back_to_system(
        self,
        resolver: DirectoryResolver,
        system_dirs: list[Path],
        write_profile_file,
    ) -> None:
        system_file = write_profile_file(system_dirs[1], "Default", "")
        assert resolver.resolve("Default") == system_file
        assert not resolver.is_user_file(system_file)

    def test_defaults_follow_environment(
        self, monkeypatch: MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "home"))
        monkeypatch.setenv("XDG_CONFIG_DIRS", str(tmp_path / "sys"))
        resolver = DirectoryResolver()
        assert resolver.user_config_base == tmp_path / "home"
        assert resolver.system_config_dirs == (tmp_path / "sys",)


def test_default_resolver_uses_isolated_home(
    isolated_config_dirs: Path,
) -> None:
    resolver = DirectoryResolver()
    assert resolver.user_directory() == (
        isolated_config_dirs / "home" / ".config" / "roxterm"
    )
    assert resolver.system_config_dirs == (
        isolated_config_dirs / "etc" / "xdg",
    )
