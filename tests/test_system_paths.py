"""Tests for library search lists and well-known locations."""

import os
import sys

import pytest

from portpath.config import Settings
from portpath.infrastructure.storage.path_string import PathString
from portpath.infrastructure.storage.system_paths import (
    SystemPathDiscovery,
    shared_library_extension,
)


def _dir(tmp_path, name) -> str:
    full = os.path.join(str(tmp_path), name)
    os.makedirs(full, exist_ok=True)
    return full


def _discovery(**overrides) -> SystemPathDiscovery:
    values = {
        "library_path_env": "PP_TEST_LIBS",
        "bitcode_path_env": "PP_TEST_BITCODE",
        "search_separator": ":",
    }
    values.update(overrides)
    return SystemPathDiscovery(Settings(**values))


class TestSearchLists:
    """Env-driven search lists."""

    def test_invalid_and_missing_entries_are_dropped(self, tmp_path, monkeypatch):
        first = _dir(tmp_path, "a")
        second = _dir(tmp_path, "b")
        monkeypatch.setenv(
            "PP_TEST_LIBS",
            f"{first}:{tmp_path}/missing:{tmp_path}/bad<dir::{second}",
        )
        found = [str(path) for path in _discovery().paths_from_env("PP_TEST_LIBS")]
        assert found == [first, second]

    def test_unset_variable_gives_empty_list(self, monkeypatch):
        monkeypatch.delenv("PP_TEST_LIBS", raising=False)
        assert _discovery().paths_from_env("PP_TEST_LIBS") == []

    def test_separator_comes_from_settings(self, tmp_path, monkeypatch):
        first = _dir(tmp_path, "a")
        second = _dir(tmp_path, "b")
        monkeypatch.setenv("PP_TEST_LIBS", f"{first};{second}")
        discovery = _discovery(search_separator=";")
        assert discovery.path_separator() == ";"
        assert [str(p) for p in discovery.paths_from_env("PP_TEST_LIBS")] == [first, second]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX library directories")
    def test_system_library_order(self, tmp_path, monkeypatch):
        env_dir = _dir(tmp_path, "env")
        libdir = _dir(tmp_path, "lib")
        monkeypatch.setenv("PP_TEST_LIBS", f"{env_dir}:{libdir}")

        paths = [str(p) for p in _discovery(default_library_dir=libdir).system_library_paths()]
        assert paths[:2] == [env_dir, libdir]
        assert paths.count(libdir) == 1
        assert paths[2:] == ["/usr/local/lib", "/usr/lib", "/lib"]

    def test_bitcode_list_uses_its_own_variable(self, tmp_path, monkeypatch):
        bitcode = _dir(tmp_path, "bitcode")
        monkeypatch.delenv("PP_TEST_LIBS", raising=False)
        monkeypatch.setenv("PP_TEST_BITCODE", bitcode)

        discovery = _discovery()
        assert str(discovery.bitcode_library_paths()[0]) == bitcode
        assert bitcode not in [str(p) for p in discovery.system_library_paths()]

    def test_unreadable_default_library_dir_is_skipped(self, tmp_path):
        discovery = _discovery(default_library_dir=f"{tmp_path}/absent")
        assert discovery.default_library_directory() is None

    def test_no_default_library_dir(self):
        assert _discovery().default_library_directory() is None


class TestFindLibrary:
    """Locating a library by base name."""

    def test_static_archive_preferred_within_a_directory(self, tmp_path, monkeypatch):
        libs = _dir(tmp_path, "libs")
        for filename in ("libwidget.a", f"libwidget{shared_library_extension()}"):
            open(os.path.join(libs, filename), "w").close()
        monkeypatch.setenv("PP_TEST_LIBS", libs)

        found = _discovery().find_library("widget")
        assert found == os.path.join(libs, "libwidget.a")

    def test_earlier_directory_wins(self, tmp_path, monkeypatch):
        first = _dir(tmp_path, "first")
        second = _dir(tmp_path, "second")
        shared = f"widget{shared_library_extension()}"
        open(os.path.join(first, shared), "w").close()
        open(os.path.join(second, "libwidget.a"), "w").close()
        monkeypatch.setenv("PP_TEST_LIBS", f"{first}:{second}")

        assert _discovery().find_library("widget") == os.path.join(first, shared)

    def test_directories_with_library_name_are_ignored(self, tmp_path, monkeypatch):
        libs = _dir(tmp_path, "libs")
        os.makedirs(os.path.join(libs, "libwidget.a"))
        monkeypatch.setenv("PP_TEST_LIBS", libs)
        assert _discovery().find_library("widget") is None

    def test_missing_or_empty_name(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PP_TEST_LIBS", _dir(tmp_path, "libs"))
        assert _discovery().find_library("portpath_no_such_library_xyz") is None
        assert _discovery().find_library("") is None


class TestLocations:
    """Single-shot location queries."""

    @pytest.mark.skipif(os.name == "nt", reason="HOME drives Path.home on POSIX")
    def test_home_and_config_directory(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        discovery = _discovery(config_subdir=".widgets")
        assert str(discovery.user_home_directory()) == str(tmp_path)
        assert str(discovery.default_config_directory()) == f"{tmp_path}/.widgets"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX root")
    def test_root_directory(self):
        root = _discovery().root_directory()
        assert str(root) == "/"
        assert root.is_root_directory()

    def test_current_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        current = _discovery().current_directory()
        assert isinstance(current, PathString)
        assert str(current) == os.getcwd()

    def test_main_executable(self):
        assert str(_discovery().main_executable_path()) == sys.executable
