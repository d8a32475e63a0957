"""Validated, portable path strings.

A ``PathString`` stores one path in canonical form: forward slashes only,
no trailing separator unless the path names a root (``"/"``, ``"C:/"``,
``"//host/"`` or the generic root ``"file:///"``).

Grammar (applied after backslashes are turned into forward slashes):

1. The empty string is invalid.
2. A colon may only appear at index 1, after an ASCII letter, in a string of
   at least three characters (``X:...``). This puts the root boundary at 2.
3. A string longer than three characters that starts with ``//`` is a UNC
   path. The root boundary is the first separator at or after index 2, or 0
   when there is none.
4. Control characters, ``\\``, ``<``, ``>`` and ``"`` are rejected.
5. Trailing separators are dropped unless they sit on the root boundary.
6. A component may not end in a space or in a period, except the
   pseudo-components ``.`` and ``..``. Reaching one of those ends the scan
   and accepts the whole string.

Every mutator builds a candidate string, validates it on its own and only
then commits it, so a failed call leaves the value untouched.

Instances are not synchronized. Callers that share one instance between
threads must lock around mutation themselves.
"""

from __future__ import annotations

import string
from functools import total_ordering
from typing import Optional, Union

from portpath.domain.errors import PathValidationError


SEPARATOR = "/"
GENERIC_ROOT = "file:///"

# NUL is included: it cannot be passed to the OS and would truncate the path.
_ILLEGAL_CHARS = frozenset('\\<>"' + "".join(chr(code) for code in range(0, 0x20)))
_DRIVE_LETTERS = frozenset(string.ascii_letters)


def canonicalize(raw: str) -> str:
    """Turn every backslash into a forward slash."""
    return str(raw).replace("\\", SEPARATOR)


def root_boundary(path: str) -> int:
    """Index where a trailing root separator is allowed to stay."""
    boundary = 0
    if path.rfind(":") == 1:
        boundary = 2
    if len(path) > 3 and path.startswith("//"):
        boundary = path.find(SEPARATOR, 2)
        if boundary == -1:
            boundary = 0
    return boundary


def validate(candidate: str) -> Optional[str]:
    """Validate an already canonicalized string.

    Returns the normalized string (non-root trailing separators removed),
    or ``None`` when the string breaks the grammar.
    """
    path = candidate
    if not path:
        return None

    colon = path.rfind(":")
    if colon != -1:
        if colon != 1 or path[0] not in _DRIVE_LETTERS or len(path) < 3:
            return None

    if any(ch in _ILLEGAL_CHARS for ch in path):
        return None

    boundary = root_boundary(path)
    length = len(path)
    while length > boundary + 1 and path[length - 1] == SEPARATOR:
        length -= 1
    path = path[:length]

    for pos, ch in enumerate(path):
        if ch not in (" ", "."):
            continue
        component_end = pos + 1 == length or path[pos + 1] == SEPARATOR
        if not component_end:
            continue
        if ch == " ":
            return None
        # "." pseudo-component
        if pos == 0 or path[pos - 1] in (SEPARATOR, ":"):
            return path
        # ".." pseudo-component
        if path[pos - 1] == "." and (pos == 1 or path[pos - 2] in (SEPARATOR, ":")):
            return path
        return None
    return path


def is_valid_string(candidate: str) -> bool:
    return validate(canonicalize(candidate)) is not None


def is_absolute_string(raw: str) -> bool:
    """True for ``/x``, ``\\x``, ``X:/x`` and ``X:\\x`` forms."""
    if not raw:
        return False
    if raw[0] in ("/", "\\"):
        return True
    return len(raw) >= 3 and raw[1] == ":" and raw[2] in ("/", "\\")


@total_ordering
class PathString:
    """A mutable, always-valid (or empty) path string."""

    __slots__ = ("_path",)
    __hash__ = None  # type: ignore[assignment]

    validate = staticmethod(validate)
    is_valid_string = staticmethod(is_valid_string)
    is_absolute_string = staticmethod(is_absolute_string)

    def __init__(self, raw: Union[str, "PathString"] = "") -> None:
        self._path = ""
        text = str(raw)
        if text and not self.set(text):
            raise PathValidationError(text)

    @classmethod
    def from_string(cls, raw: Union[str, "PathString"]) -> "PathString":
        """Build a path from ``raw``; raises ``PathValidationError`` if invalid."""
        text = str(raw)
        if not text:
            raise PathValidationError(text, "empty path")
        return cls(text)

    @classmethod
    def generic_root(cls) -> "PathString":
        """The platform-neutral root. It is outside the grammar, so it is not validated."""
        instance = cls()
        instance._path = GENERIC_ROOT
        return instance

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"PathString({self._path!r})"

    def __fspath__(self) -> str:
        return self._path

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PathString):
            return self._path == other._path
        if isinstance(other, str):
            return self._path == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, PathString):
            return self._path < other._path
        if isinstance(other, str):
            return self._path < other
        return NotImplemented

    def __bool__(self) -> bool:
        return bool(self._path)

    def copy(self) -> "PathString":
        clone = PathString()
        clone._path = self._path
        return clone

    def is_empty(self) -> bool:
        return not self._path

    def is_valid(self) -> bool:
        return self._path == GENERIC_ROOT or validate(self._path) is not None

    def is_absolute(self) -> bool:
        return is_absolute_string(self._path)

    def is_root_directory(self) -> bool:
        return self._path.endswith(SEPARATOR)

    def get_last(self) -> str:
        """Final component; a root is returned whole."""
        slash = self._path.rfind(SEPARATOR)
        if slash == -1 or slash == len(self._path) - 1:
            return self._path
        return self._path[slash + 1:]

    def get_basename(self) -> str:
        """Final component without its last suffix."""
        start = self._path.rfind(SEPARATOR) + 1
        dot = self._path.rfind(".")
        if dot < start:
            return self._path[start:]
        return self._path[start:dot]

    def get_suffix(self) -> str:
        """Text after the last period of the final component, or ``""``."""
        slash = self._path.rfind(SEPARATOR)
        dot = self._path.rfind(".")
        if dot == -1 or dot < slash:
            return ""
        return self._path[dot + 1:]

    def get_dirname(self) -> str:
        """Parent path as a string; ``"."`` when there is no separator."""
        trimmed = self._path.rstrip(SEPARATOR)
        if not trimmed:
            return SEPARATOR if self._path else "."
        slash = trimmed.rfind(SEPARATOR)
        if slash == -1:
            return "."
        head = trimmed[:slash].rstrip(SEPARATOR)
        if not head:
            return SEPARATOR
        if len(head) == 2 and head[1] == ":":
            return head + SEPARATOR
        return head

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def _commit(self, candidate: str) -> bool:
        normalized = validate(candidate)
        if normalized is None:
            return False
        self._path = normalized
        return True

    def clear(self) -> None:
        self._path = ""

    def set(self, raw: str) -> bool:
        if not raw:
            return False
        if raw == GENERIC_ROOT:
            self._path = GENERIC_ROOT
            return True
        return self._commit(canonicalize(raw))

    def append_component(self, name: str) -> bool:
        if not name:
            return False
        candidate = self._path
        if candidate and not candidate.endswith(SEPARATOR):
            candidate += SEPARATOR
        return self._commit(candidate + canonicalize(name))

    def erase_component(self) -> bool:
        slash = self._path.rfind(SEPARATOR)
        if slash == -1 or slash == len(self._path) - 1:
            return False
        if slash == root_boundary(self._path):
            # Keep the root separator: "C:/x" -> "C:/", "/x" -> "/".
            return self._commit(self._path[:slash + 1])
        return self._commit(self._path[:slash])

    def append_suffix(self, suffix: str) -> bool:
        if not suffix:
            return False
        return self._commit(f"{self._path}.{canonicalize(suffix)}")

    def erase_suffix(self) -> bool:
        dot = self._path.rfind(".")
        slash = self._path.rfind(SEPARATOR)
        if dot == -1 or dot <= slash + 1:
            return False
        return self._commit(self._path[:dot])


PathLike = Union[PathString, str]
