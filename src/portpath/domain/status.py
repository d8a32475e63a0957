"""File metadata snapshot."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

# Owner/group identifiers are not meaningful across platforms.
UNKNOWN_ID = 9999

MODE_READ_ONLY = 0o555
MODE_READ_WRITE = 0o777
OWNER_WRITE_BIT = 0o200


@dataclass(frozen=True)
class FileStatus:
    """Metadata for one filesystem entry at the time it was queried.

    ``mode`` is approximated from a single read-only flag. ``unique_id`` is a
    weak fingerprint of the path spelling, not an inode: two spellings of the
    same file get different ids, and unrelated paths may collide.
    """

    file_size: int
    mod_time: datetime
    mode: int = MODE_READ_WRITE
    user: int = UNKNOWN_ID
    group: int = UNKNOWN_ID
    unique_id: int = 0
    is_dir: bool = False
    is_file: bool = False

    @property
    def is_read_only(self) -> bool:
        return not self.mode & OWNER_WRITE_BIT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_size": self.file_size,
            "mod_time": self.mod_time.isoformat(),
            "mode": oct(self.mode),
            "user": self.user,
            "group": self.group,
            "unique_id": self.unique_id,
            "is_dir": self.is_dir,
            "is_file": self.is_file,
        }


def path_fingerprint(path: str) -> int:
    """Sum of the UTF-8 bytes of ``path``."""
    return sum(str(path).encode("utf-8", errors="surrogateescape"))
