"""Well-known locations and library search lists."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from portpath.config import Settings, settings as default_settings
from portpath.infrastructure.config.settings_utils import env_list, env_str
from portpath.infrastructure.logging_setup import get_logger
from portpath.infrastructure.storage.file_tools import FilesystemOps
from portpath.infrastructure.storage.path_string import PathString

logger = get_logger("system_paths")

_POSIX_LIBRARY_DIRS = ("/usr/local/lib", "/usr/lib", "/lib")


def shared_library_extension() -> str:
    if os.name == "nt":
        return ".dll"
    if sys.platform == "darwin":
        return ".dylib"
    return ".so"


def _to_path(raw: Optional[str]) -> Optional[PathString]:
    candidate = PathString()
    if raw and candidate.set(raw):
        return candidate
    return None


class SystemPathDiscovery:
    """Search lists and single-shot location queries.

    Nothing is cached: every call asks the environment and the OS again.
    """

    def __init__(self, settings: Optional[Settings] = None, ops: Optional[FilesystemOps] = None):
        self._settings = settings or default_settings
        self._ops = ops or FilesystemOps()

    # ------------------------------------------------------------------
    # Search lists
    # ------------------------------------------------------------------

    def path_separator(self) -> str:
        return self._settings.search_separator

    def paths_from_env(self, name: str) -> List[PathString]:
        """Valid, readable entries of the search list held in env var ``name``."""
        found: List[PathString] = []
        for entry in env_list(name, separator=self._settings.search_separator):
            path = _to_path(entry)
            if path is None or not self._ops.can_read(path):
                logger.debug("search_path_dropped", variable=name, entry=entry)
                continue
            found.append(path)
        return found

    def default_library_directory(self) -> Optional[PathString]:
        path = _to_path(self._settings.default_library_dir)
        if path is None or not self._ops.can_read(path):
            return None
        return path

    def well_known_library_directories(self) -> List[PathString]:
        if os.name == "nt":
            system_root = env_str("SystemRoot", "C:/WINDOWS")
            raw = [f"{system_root}/System32", system_root]
        else:
            raw = list(_POSIX_LIBRARY_DIRS)
        return [path for path in (_to_path(item) for item in raw) if path is not None]

    def _combine(self, env_name: str) -> List[PathString]:
        ordered: List[PathString] = list(self.paths_from_env(env_name))
        libdir = self.default_library_directory()
        if libdir is not None:
            ordered.append(libdir)
        ordered.extend(self.well_known_library_directories())
        return _dedupe(ordered)

    def system_library_paths(self) -> List[PathString]:
        """Env override, then the default library dir, then OS directories."""
        return self._combine(self._settings.library_path_env)

    def bitcode_library_paths(self) -> List[PathString]:
        """Same order as ``system_library_paths`` but driven by the bitcode variable."""
        return self._combine(self._settings.bitcode_path_env)

    def find_library(self, name: str) -> Optional[PathString]:
        """First ``lib<name>.a``, ``lib<name><ext>`` or ``<name><ext>`` on the system list."""
        if not name:
            return None
        ext = shared_library_extension()
        candidates = (f"lib{name}.a", f"lib{name}{ext}", f"{name}{ext}")
        for directory in self.system_library_paths():
            for filename in candidates:
                path = directory.copy()
                if path.append_component(filename) and self._ops.is_regular_file(path):
                    return path
        return None

    # ------------------------------------------------------------------
    # Single-shot queries
    # ------------------------------------------------------------------

    def user_home_directory(self) -> Optional[PathString]:
        try:
            home = str(Path.home())
        except RuntimeError:
            return None
        return _to_path(home)

    def default_config_directory(self) -> Optional[PathString]:
        home = self.user_home_directory()
        if home is None or not home.append_component(self._settings.config_subdir):
            return None
        return home

    def root_directory(self) -> PathString:
        if os.name == "nt":
            return PathString.generic_root()
        return PathString.from_string("/")

    def current_directory(self) -> Optional[PathString]:
        try:
            return _to_path(os.getcwd())
        except OSError:
            return None

    def main_executable_path(self) -> Optional[PathString]:
        return _to_path(sys.executable)


def _dedupe(paths: Iterable[PathString]) -> List[PathString]:
    seen = set()
    unique: List[PathString] = []
    for path in paths:
        key = str(path)
        if key in seen:
            continue
        seen.add(key)
        unique.append(path)
    return unique
