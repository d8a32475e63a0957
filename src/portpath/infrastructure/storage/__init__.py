"""Storage infrastructure for portpath.

Provides the path grammar, filesystem operations, status caching, unique
names and system location discovery.
"""

from .path_string import (
    GENERIC_ROOT,
    SEPARATOR,
    PathString,
    canonicalize,
    is_absolute_string,
    is_valid_string,
)
from .file_tools import FilesystemOps, OpResult
from .path_status import PathWithStatus
from .file_magic import FileType, identify_file_type, identify_magic
from .unique_names import FilesystemContext, TemporaryDirectory, UniqueNameGenerator
from .system_paths import SystemPathDiscovery

__all__ = [
    # Path grammar
    "GENERIC_ROOT",
    "SEPARATOR",
    "PathString",
    "canonicalize",
    "is_absolute_string",
    "is_valid_string",
    # Operations (main API)
    "FilesystemOps",
    "OpResult",
    "PathWithStatus",
    # File types
    "FileType",
    "identify_file_type",
    "identify_magic",
    # Fresh names
    "FilesystemContext",
    "TemporaryDirectory",
    "UniqueNameGenerator",
    # Locations
    "SystemPathDiscovery",
]
