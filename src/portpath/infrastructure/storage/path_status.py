"""Path plus cached file status."""

from __future__ import annotations

from typing import Optional

from portpath.domain.errors import FileIOError
from portpath.domain.status import FileStatus
from portpath.infrastructure.storage import file_io
from portpath.infrastructure.storage.file_tools import OpResult
from portpath.infrastructure.storage.path_string import PathString


class PathWithStatus:
    """A ``PathString`` with a lazily filled ``FileStatus`` cache.

    The cache is empty until the first successful ``get_status`` call and is
    only refreshed on request; nothing watches the filesystem.
    """

    def __init__(self, path: Optional[PathString] = None):
        self._path = path.copy() if path is not None else PathString()
        self._status: Optional[FileStatus] = None

    @property
    def path(self) -> PathString:
        """A copy; use ``set_path`` to point at another entry."""
        return self._path.copy()

    @property
    def cached_status(self) -> Optional[FileStatus]:
        return self._status

    def set_path(self, path: PathString) -> None:
        """Point at a different path and drop the cached status."""
        self._path = path.copy()
        self._status = None

    def invalidate_status(self) -> None:
        self._status = None

    def get_status(self, force_update: bool = False) -> OpResult:
        """Return the cached status, querying the OS when needed.

        A failed query keeps whatever was cached before.
        """
        if self._status is None or force_update:
            try:
                self._status = file_io.query_status(self._path)
            except FileIOError as e:
                return OpResult.failed(e)
        return OpResult(success=True, data={"path": str(self._path), "status": self._status})

    def set_status_info(self, desired: FileStatus) -> OpResult:
        """Apply the modification time and owner-write bit of ``desired``.

        Other mode bits are ignored. Directories are rejected.
        """
        try:
            file_io.apply_status(self._path, desired)
        except FileIOError as e:
            return OpResult.failed(e)
        self._status = None
        return OpResult(success=True, data={"path": str(self._path)})
