"""Domain models for portpath."""

from .errors import (
    ContractViolationError,
    FileIOError,
    PathValidationError,
    PortPathError,
    TemporaryDirectoryError,
    UniqueNameExhaustedError,
)
from .status import FileStatus, UNKNOWN_ID, path_fingerprint

__all__ = [
    "ContractViolationError",
    "FileIOError",
    "PathValidationError",
    "PortPathError",
    "TemporaryDirectoryError",
    "UniqueNameExhaustedError",
    "FileStatus",
    "UNKNOWN_ID",
    "path_fingerprint",
]
