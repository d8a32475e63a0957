"""Environment parsing helpers."""

from __future__ import annotations

import os
from typing import Sequence


def split_search_list(value: str, separator: str = os.pathsep) -> list[str]:
    """Split a search-path style list, dropping blank entries.

    Entries are stripped of surrounding whitespace; their content is not
    otherwise interpreted here.
    """
    return [item.strip() for item in str(value or "").split(separator) if item.strip()]


def env_str(name: str, default: str = "") -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    return str(value).strip()


def env_list(
    name: str,
    default: Sequence[str] | None = None,
    *,
    separator: str = ",",
) -> list[str]:
    """Parse a separator-delimited env list (comma by default)."""
    value = os.environ.get(name)
    if value is None:
        return list(default or [])
    parsed = split_search_list(value, separator)
    return parsed or list(default or [])
