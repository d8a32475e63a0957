"""Tests for infrastructure env parsing helpers."""

from portpath.infrastructure.config.settings_utils import (
    env_list,
    env_str,
    split_search_list,
)


def test_split_search_list_drops_blank_entries():
    assert split_search_list("/a:/b::/c", ":") == ["/a", "/b", "/c"]
    assert split_search_list("C:/x;;D:/y", ";") == ["C:/x", "D:/y"]
    assert split_search_list("", ":") == []
    assert split_search_list(None, ":") == []


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("PP_TEST_STR", "  value ")
    monkeypatch.setenv("PP_TEST_LIST", "a, b , ,c")
    monkeypatch.setenv("PP_TEST_PATHS", "/x:/y")
    monkeypatch.delenv("PP_TEST_MISSING", raising=False)

    assert env_str("PP_TEST_STR") == "value"
    assert env_str("PP_TEST_MISSING", "fallback") == "fallback"
    assert env_list("PP_TEST_LIST", default=["x"]) == ["a", "b", "c"]
    assert env_list("PP_TEST_PATHS", separator=":") == ["/x", "/y"]
    assert env_list("PP_TEST_MISSING", default=["x"]) == ["x"]
