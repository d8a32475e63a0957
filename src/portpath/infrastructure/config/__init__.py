"""Configuration helpers."""

from .settings_utils import env_list, env_str, split_search_list

__all__ = [
    "env_list",
    "env_str",
    "split_search_list",
]
