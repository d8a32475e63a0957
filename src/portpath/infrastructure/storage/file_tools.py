"""Result-returning filesystem operations for portpath.

``FilesystemOps`` is the main entry point. Its methods never raise for
runtime OS failures such as missing files or denied permissions; they return an
``OpResult`` whose ``error`` carries the path and the OS reason. Predicates
return plain booleans and treat an unobservable entry as ``False``.

Programming errors, such as asking for a magic-number read beyond the
configured limit, still raise ``ContractViolationError``.

Examples:
    >>> from portpath.infrastructure.storage import FilesystemOps, PathString
    >>> ops = FilesystemOps()
    >>> target = PathString.from_string("/tmp/demo/a/b")
    >>> ops.create_directory(target, create_parents=True).success
    True
    >>> ops.erase_from_disk(PathString.from_string("/tmp/demo"), remove_contents=True).success
    True
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from portpath.config import settings
from portpath.domain.errors import FileIOError, PathValidationError
from portpath.infrastructure.logging_setup import get_logger
from portpath.infrastructure.storage import file_io
from portpath.infrastructure.storage.path_string import PathLike, PathString

logger = get_logger("file_tools")


@dataclass
class OpResult:
    """Result of a filesystem operation."""
    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: str = ""

    @property
    def is_error(self) -> bool:
        return not self.success

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        result = {"success": self.success}
        if self.error:
            result["error"] = self.error
        result.update(self.data)
        return result

    @classmethod
    def failed(cls, exc: FileIOError) -> "OpResult":
        return cls(success=False, error=str(exc), data={"path": exc.path})


class FilesystemOps:
    """Stateless filesystem operations over ``PathString`` values.

    Not synchronized: two threads mutating the same entry through this class
    race exactly as two processes would.
    """

    def __init__(self, *, magic_read_limit: Optional[int] = None):
        self.magic_read_limit = (
            settings.magic_read_limit if magic_read_limit is None else magic_read_limit
        )

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    def exists(self, path: PathLike) -> bool:
        return file_io.query_stat(path) is not None

    def is_directory(self, path: PathLike) -> bool:
        info = file_io.query_stat(path)
        return info is not None and stat.S_ISDIR(info.st_mode)

    def is_regular_file(self, path: PathLike) -> bool:
        info = file_io.query_stat(path)
        return info is not None and stat.S_ISREG(info.st_mode)

    def is_symbolic_link(self, path: PathLike) -> bool:
        info = file_io.query_stat(path, follow_symlinks=False)
        return info is not None and stat.S_ISLNK(info.st_mode)

    def can_read(self, path: PathLike) -> bool:
        return self._access(path, os.R_OK)

    def can_write(self, path: PathLike) -> bool:
        return self._access(path, os.W_OK)

    def can_execute(self, path: PathLike) -> bool:
        return self._access(path, os.X_OK)

    @staticmethod
    def _access(path: PathLike, mode: int) -> bool:
        try:
            return os.access(os.fspath(path), mode)
        except (OSError, ValueError):
            return False

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def create_directory(self, path: PathLike, *, create_parents: bool = False) -> OpResult:
        """Create a directory; an existing directory is not an error.

        Args:
            path: Directory to create
            create_parents: Create every missing ancestor as well

        Returns:
            OpResult with ``created`` (list of new directories)
        """
        try:
            created = file_io.create_directory(path, create_parents=create_parents)
        except FileIOError as e:
            logger.warning("create_directory_failed", path=str(path), error=str(e))
            return OpResult.failed(e)
        if created:
            logger.debug("directory_created", path=str(path), count=len(created))
        return OpResult(success=True, data={"path": str(path), "created": created})

    def create_file(self, path: PathLike) -> OpResult:
        """Create an empty file exclusively."""
        try:
            file_io.create_file(path)
        except FileIOError as e:
            return OpResult.failed(e)
        return OpResult(success=True, data={"path": str(path)})

    # -------------------------------------------------------------------------
    # Removal / rename / copy
    # -------------------------------------------------------------------------

    def erase_from_disk(self, path: PathLike, *, remove_contents: bool = False) -> OpResult:
        """Remove a file or directory.

        A path that does not exist is a successful no-op (``deleted`` is
        ``False``). With ``remove_contents`` a directory's children are
        snapshotted and erased before the directory itself. Entries changed
        by someone else after the snapshot are not detected; ones that vanish
        are simply skipped.

        Args:
            path: Entry to remove
            remove_contents: Recursively remove a non-empty directory

        Returns:
            OpResult with ``deleted``
        """
        try:
            deleted = file_io.erase(path, remove_contents=remove_contents)
        except FileIOError as e:
            logger.warning("erase_failed", path=str(path), error=str(e))
            return OpResult.failed(e)
        except RecursionError:
            logger.warning("erase_failed", path=str(path), error="tree too deep")
            return OpResult(
                success=False,
                error=f"[erase] {path}: directory tree too deep to erase",
                data={"path": str(path)},
            )
        if deleted:
            logger.debug("entry_erased", path=str(path), recursive=remove_contents)
        return OpResult(success=True, data={"path": str(path), "deleted": deleted})

    def rename_path(self, path: PathLike, new_name: PathLike) -> OpResult:
        """Rename ``path`` to ``new_name``, replacing an existing target."""
        try:
            file_io.rename(path, new_name)
        except FileIOError as e:
            return OpResult.failed(e)
        return OpResult(success=True, data={"path": str(new_name), "previous": str(path)})

    def copy_file(self, dest: PathLike, src: PathLike) -> OpResult:
        """Copy ``src`` over ``dest`` including its metadata."""
        try:
            file_io.copy_file(dest, src)
        except FileIOError as e:
            return OpResult.failed(e)
        return OpResult(success=True, data={"path": str(dest), "source": str(src)})

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def get_directory_contents(self, path: PathLike) -> OpResult:
        """List the children of a directory as ``PathString`` values.

        Children whose names the path grammar rejects are left out and
        counted in ``skipped``.
        """
        try:
            parent = path if isinstance(path, PathString) else PathString.from_string(path)
        except PathValidationError as e:
            return OpResult(success=False, error=str(e), data={"path": str(path)})
        if not self.is_directory(parent):
            return OpResult(
                success=False,
                error=f"[list] {parent}: Not a directory",
                data={"path": str(parent)},
            )
        try:
            names = file_io.list_directory(parent)
        except FileIOError as e:
            return OpResult.failed(e)

        entries: List[PathString] = []
        skipped: List[str] = []
        for name in names:
            child = parent.copy()
            if child.append_component(name):
                entries.append(child)
            else:
                skipped.append(name)
        if skipped:
            logger.info("directory_entries_skipped", path=str(parent), names=skipped)
        return OpResult(
            success=True,
            data={"path": str(parent), "entries": entries, "skipped": skipped},
        )

    def get_magic_number(self, path: PathLike, length: int) -> OpResult:
        """Read exactly ``length`` leading bytes into ``data["magic"]``.

        Raises:
            ContractViolationError: ``length`` is negative or above the limit
        """
        try:
            magic = file_io.read_magic(path, length, limit=self.magic_read_limit)
        except FileIOError as e:
            return OpResult.failed(e)
        return OpResult(success=True, data={"path": str(path), "magic": magic})

    # -------------------------------------------------------------------------
    # Permissions
    # -------------------------------------------------------------------------

    def make_readable(self, path: PathLike) -> OpResult:
        return self._add_bits(path, stat.S_IRUSR)

    def make_writable(self, path: PathLike) -> OpResult:
        return self._add_bits(path, stat.S_IWUSR)

    def make_executable(self, path: PathLike) -> OpResult:
        return self._add_bits(path, stat.S_IXUSR)

    def _add_bits(self, path: PathLike, bits: int) -> OpResult:
        try:
            file_io.add_mode_bits(path, bits)
        except FileIOError as e:
            return OpResult.failed(e)
        return OpResult(success=True, data={"path": str(path)})
