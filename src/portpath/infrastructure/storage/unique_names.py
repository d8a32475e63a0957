"""Fresh path names and the per-process temporary directory.

Neither is kept in module globals. Both live on a ``FilesystemContext`` that
the caller creates and passes around. The temporary directory is prepared by
an explicit ``initialize_temporary_directory`` call, never on first use.

None of these objects lock. Share a context between threads only behind the
caller's own lock.
"""

from __future__ import annotations

import os
import tempfile
import time
from typing import Optional

from portpath.config import Settings, settings as default_settings
from portpath.domain.errors import (
    PathValidationError,
    TemporaryDirectoryError,
    UniqueNameExhaustedError,
)
from portpath.infrastructure.logging_setup import get_logger
from portpath.infrastructure.storage.file_tools import FilesystemOps, OpResult
from portpath.infrastructure.storage.path_string import PathString

logger = get_logger("unique_names")

SUFFIX_SPACE = 1_000_000


def initial_counter() -> int:
    """Seed from the process id and a high-resolution timer sample.

    This lowers the chance that two processes probe the same suffixes. It
    does not make collisions impossible; ``make_unique`` still probes.
    """
    pid = os.getpid() & 0xFFFFFFFF
    seed = ((pid << 16) | (pid >> 16)) & 0xFFFFFFFF
    sample = time.perf_counter_ns()
    seed ^= (sample >> 32) & 0xFFFFFFFF
    seed ^= sample & 0xFFFFFFFF
    return seed % SUFFIX_SPACE


class UniqueNameGenerator:
    """Appends ``-NNNNNN`` suffixes until a name is free."""

    def __init__(self, ops: Optional[FilesystemOps] = None, *, seed: Optional[int] = None):
        self._ops = ops or FilesystemOps()
        self._counter = (initial_counter() if seed is None else seed) % SUFFIX_SPACE

    @property
    def counter(self) -> int:
        return self._counter

    def _next_suffix(self) -> str:
        suffix = f"-{self._counter:06d}"
        self._counter = (self._counter + 1) % SUFFIX_SPACE
        return suffix

    def make_unique(self, path: PathString, reuse_existing: bool = False) -> PathString:
        """Return a path that did not exist when it was probed.

        With ``reuse_existing`` a path that is currently free comes back
        unchanged. Otherwise the suffix is always appended.

        Raises:
            UniqueNameExhaustedError: every suffix is taken
        """
        if reuse_existing and not self._ops.exists(path):
            return path.copy()

        base = str(path)
        for _ in range(SUFFIX_SPACE):
            candidate = PathString.from_string(base + self._next_suffix())
            if not self._ops.exists(candidate):
                return candidate
        raise UniqueNameExhaustedError(f"no free suffix left for {base}")


class TemporaryDirectory:
    """A scratch directory named after the current process id."""

    def __init__(self, ops: Optional[FilesystemOps] = None, settings: Optional[Settings] = None):
        self._ops = ops or FilesystemOps()
        self._settings = settings or default_settings
        self._path: Optional[PathString] = None

    @property
    def is_initialized(self) -> bool:
        return self._path is not None

    @property
    def path(self) -> PathString:
        if self._path is None:
            raise TemporaryDirectoryError("temporary directory used before initialize()")
        return self._path.copy()

    def _temp_root(self) -> str:
        if self._settings.temp_root is not None:
            return str(self._settings.temp_root)
        return tempfile.gettempdir()

    def initialize(self) -> OpResult:
        """Create the directory, wiping any leftover with the same name.

        A previous process with the same id may have left a directory behind;
        it is erased before the empty directory is created. Calling this again
        after success is a no-op. Nothing removes the directory at exit.
        """
        if self._path is not None:
            return OpResult(success=True, data={"path": str(self._path), "created": []})

        root = self._temp_root()
        try:
            candidate = PathString.from_string(root)
        except PathValidationError as e:
            return OpResult(success=False, error=str(e), data={"path": root})
        name = f"{self._settings.temp_dir_prefix}{os.getpid()}"
        if not candidate.append_component(name):
            return OpResult(
                success=False,
                error=f"temporary directory name {name!r} is not valid under {root}",
                data={"path": root},
            )

        erased = self._ops.erase_from_disk(candidate, remove_contents=True)
        if erased.is_error:
            return erased
        created = self._ops.create_directory(candidate, create_parents=True)
        if created.is_error:
            return created

        self._path = candidate
        logger.info(
            "temporary_directory_ready",
            path=str(candidate),
            stale_removed=erased.data.get("deleted", False),
        )
        return created


class FilesystemContext:
    """Caller-owned bundle of filesystem state.

    Holds the operations facade, the unique-name counter and the temporary
    directory so nothing lives in module globals.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        ops: Optional[FilesystemOps] = None,
        seed: Optional[int] = None,
    ):
        self.settings = settings or default_settings
        self.ops = ops or FilesystemOps(magic_read_limit=self.settings.magic_read_limit)
        self.names = UniqueNameGenerator(self.ops, seed=seed)
        self.temp_dir = TemporaryDirectory(self.ops, self.settings)

    def make_unique(self, path: PathString, reuse_existing: bool = False) -> PathString:
        return self.names.make_unique(path, reuse_existing)

    def initialize_temporary_directory(self) -> OpResult:
        return self.temp_dir.initialize()

    def temporary_directory(self) -> PathString:
        """Return the prepared temporary directory.

        Raises:
            TemporaryDirectoryError: ``initialize_temporary_directory`` has not
                succeeded yet
        """
        return self.temp_dir.path

    def create_temporary_file(self, path: PathString, reuse_existing: bool = True) -> OpResult:
        """Pick a free name based on ``path`` and create it as an empty file.

        Another process can still claim the name between probe and creation;
        creation is exclusive, so that shows up as an error result.
        """
        unique = self.make_unique(path, reuse_existing)
        result = self.ops.create_file(unique)
        if result.success:
            result.data["entry"] = unique
        return result
