"""Filesystem primitives for portpath.

Each function performs one logical OS operation on a path and raises
``FileIOError`` when the OS refuses. ``FilesystemOps`` in ``file_tools``
wraps these into result values.

Paths may be ``PathString`` instances or plain strings; both go through
``os.fspath``.
"""

from __future__ import annotations

import os
import shutil
import stat
from typing import List, Optional

from portpath.domain.errors import ContractViolationError, FileIOError
from portpath.domain.status import (
    MODE_READ_ONLY,
    MODE_READ_WRITE,
    OWNER_WRITE_BIT,
    FileStatus,
    path_fingerprint,
)
from portpath.infrastructure.storage.path_string import PathLike, SEPARATOR
from portpath.infrastructure.time_utils import from_timestamp, to_timestamp


def _os_failure(exc: OSError, path: str, operation: str, what: str) -> FileIOError:
    reason = exc.strerror or str(exc)
    if exc.errno is not None:
        reason = f"{reason} (errno {exc.errno})"
    return FileIOError(f"{what}: {reason}", path, operation)


def _child(parent: str, name: str) -> str:
    if parent.endswith(SEPARATOR):
        return parent + name
    return f"{parent}{SEPARATOR}{name}"


# ---------------------------------------------------------------------------
# Metadata queries
# ---------------------------------------------------------------------------


def query_stat(path: PathLike, *, follow_symlinks: bool = True) -> Optional[os.stat_result]:
    """Stat ``path``; ``None`` when the entry cannot be observed."""
    try:
        return os.stat(os.fspath(path), follow_symlinks=follow_symlinks)
    except (OSError, ValueError):
        return None


def query_status(path: PathLike) -> FileStatus:
    """Build a ``FileStatus`` snapshot for ``path``."""
    pathname = os.fspath(path)
    try:
        info = os.stat(pathname)
    except OSError as exc:
        raise _os_failure(exc, pathname, "stat", "Can't get status")
    read_only = not info.st_mode & stat.S_IWUSR
    return FileStatus(
        file_size=int(info.st_size),
        mod_time=from_timestamp(info.st_mtime),
        mode=MODE_READ_ONLY if read_only else MODE_READ_WRITE,
        unique_id=path_fingerprint(pathname),
        is_dir=stat.S_ISDIR(info.st_mode),
        is_file=stat.S_ISREG(info.st_mode),
    )


def apply_status(path: PathLike, desired: FileStatus) -> None:
    """Write back the modification time and owner-write bit of ``desired``."""
    pathname = os.fspath(path)
    try:
        info = os.stat(pathname)
    except OSError as exc:
        raise _os_failure(exc, pathname, "set_status", "Can't get status")
    if stat.S_ISDIR(info.st_mode):
        raise FileIOError("Can't set status of a directory", pathname, "set_status")

    mtime_ns = round(to_timestamp(desired.mod_time) * 1_000_000) * 1000
    mode = stat.S_IMODE(info.st_mode)
    if desired.mode & OWNER_WRITE_BIT:
        mode |= stat.S_IWUSR
    else:
        mode &= ~stat.S_IWUSR
    try:
        os.utime(pathname, ns=(info.st_atime_ns, mtime_ns))
        os.chmod(pathname, mode)
    except OSError as exc:
        raise _os_failure(exc, pathname, "set_status", "Can't set status")


def add_mode_bits(path: PathLike, bits: int) -> None:
    pathname = os.fspath(path)
    try:
        current = stat.S_IMODE(os.stat(pathname).st_mode)
        os.chmod(pathname, current | bits)
    except OSError as exc:
        raise _os_failure(exc, pathname, "chmod", "Can't change mode")


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


def _walk_start(pathname: str) -> int:
    """Index of the first component that may need creating.

    ``pathname`` always ends with a separator here. Drive letters, the root
    separator and a UNC ``//host/share/`` prefix are skipped.
    """
    if pathname.startswith("//"):
        host_end = pathname.find(SEPARATOR, 2)
        if host_end == -1:
            raise FileIOError("badly formed remote directory", pathname, "mkdir")
        share_end = pathname.find(SEPARATOR, host_end + 1)
        if share_end == -1:
            raise FileIOError("badly formed remote directory", pathname, "mkdir")
        start = share_end + 1
        if start >= len(pathname):
            raise FileIOError("badly formed remote directory", pathname, "mkdir")
        return start

    start = 0
    if len(pathname) > 1 and pathname[1] == ":":
        start = 2
    if pathname[start:start + 1] == SEPARATOR:
        start += 1
    return start


def _make_one_directory(target: str) -> bool:
    """Create ``target``; an existing directory counts as success."""
    try:
        os.mkdir(target)
        return True
    except FileExistsError:
        if os.path.isdir(target):
            return False
        raise FileIOError("Can't create directory: a file is in the way", target, "mkdir")
    except OSError as exc:
        raise _os_failure(exc, target, "mkdir", "Can't create directory")


def create_directory(path: PathLike, *, create_parents: bool = False) -> List[str]:
    """Create a directory, optionally with its missing ancestors.

    Returns the directories that were actually created, outermost first.
    """
    pathname = os.fspath(path)
    if not pathname.endswith(SEPARATOR):
        pathname += SEPARATOR

    if not create_parents:
        target = pathname[:-1] or SEPARATOR
        return [target] if _make_one_directory(target) else []

    start = _walk_start(pathname)
    created: List[str] = []
    pos = start
    while pos < len(pathname):
        end = pathname.index(SEPARATOR, pos)
        target = pathname[:end]
        if target and _make_one_directory(target):
            created.append(target)
        pos = end + 1
    return created


def create_file(path: PathLike) -> None:
    """Create an empty file; fails when anything already exists there."""
    pathname = os.fspath(path)
    try:
        with open(pathname, "xb"):
            pass
    except FileExistsError:
        raise FileIOError("Can't create file: already exists", pathname, "create")
    except OSError as exc:
        raise _os_failure(exc, pathname, "create", "Can't create file")


# ---------------------------------------------------------------------------
# Removal
# ---------------------------------------------------------------------------


def list_directory(path: PathLike) -> List[str]:
    """Names of the immediate children of ``path``, sorted."""
    pathname = os.fspath(path)
    try:
        with os.scandir(pathname) as entries:
            return sorted(entry.name for entry in entries)
    except OSError as exc:
        raise _os_failure(exc, pathname, "list", "Can't read directory")


def erase(path: PathLike, *, remove_contents: bool = False) -> bool:
    """Remove a file, symlink or directory.

    Returns ``True`` if this call removed the entry and ``False`` if it was
    already gone. With ``remove_contents`` the children of a directory are
    listed into a snapshot first and erased one by one afterwards. Anything
    that disappears between the snapshot and its removal is skipped.
    Symbolic links are removed, never followed. Recursion follows the tree
    depth, so a tree deeper than the interpreter recursion limit raises
    ``RecursionError``.
    """
    pathname = os.fspath(path)
    try:
        info = os.lstat(pathname)
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise _os_failure(exc, pathname, "erase", "Can't get status")

    if stat.S_ISDIR(info.st_mode):
        if remove_contents:
            try:
                with os.scandir(pathname) as entries:
                    snapshot = sorted(_child(pathname, entry.name) for entry in entries)
            except FileNotFoundError:
                return False
            except OSError as exc:
                raise _os_failure(exc, pathname, "erase", "Can't read directory")
            for child in snapshot:
                erase(child, remove_contents=True)
        try:
            os.rmdir(pathname)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise _os_failure(exc, pathname, "erase", "Can't destroy directory")
        return True

    if not stat.S_ISLNK(info.st_mode) and not info.st_mode & stat.S_IWUSR:
        try:
            os.chmod(pathname, stat.S_IMODE(info.st_mode) | stat.S_IWUSR)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise _os_failure(exc, pathname, "erase", "Can't destroy file")
    try:
        os.unlink(pathname)
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise _os_failure(exc, pathname, "erase", "Can't destroy file")
    return True


# ---------------------------------------------------------------------------
# Rename / copy / read
# ---------------------------------------------------------------------------


def rename(path: PathLike, new_name: PathLike) -> None:
    """Move ``path`` to ``new_name``, replacing any existing entry."""
    source = os.fspath(path)
    try:
        os.replace(source, os.fspath(new_name))
    except OSError as exc:
        raise _os_failure(exc, source, "rename", f"Can't move to {os.fspath(new_name)}")


def copy_file(dest: PathLike, src: PathLike) -> None:
    source = os.fspath(src)
    try:
        shutil.copy2(source, os.fspath(dest))
    except OSError as exc:
        raise _os_failure(exc, source, "copy", f"Can't copy to {os.fspath(dest)}")


def read_magic(path: PathLike, length: int, *, limit: int = 1024) -> bytes:
    """Read exactly ``length`` bytes from the start of ``path``."""
    if length < 0 or length > limit:
        raise ContractViolationError(
            f"magic number read of {length} bytes is outside 0..{limit}"
        )
    pathname = os.fspath(path)
    try:
        with open(pathname, "rb") as handle:
            data = handle.read(length)
    except OSError as exc:
        raise _os_failure(exc, pathname, "magic", "Can't read file")
    if len(data) != length:
        raise FileIOError(
            f"short read: wanted {length} bytes, got {len(data)}", pathname, "magic"
        )
    return data
