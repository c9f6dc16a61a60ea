r"""Unit tests for the JSON path helpers."""

from __future__ import annotations

import pytest

from resproxy.utils.json_path import (
    MISSING,
    dumps_compact,
    ensure_object_path,
    get_path,
    has_meaningful_value,
    has_path,
    parse_json_object,
    set_path,
    split_path,
)

ISSUE = {"key": "A-1", "fields": {"status": {"name": "Done"}, "labels": ["x"], "parent": None}}

################################
#     Tests for split_path     #
################################


@pytest.mark.parametrize(
    ("path", "expected"),
    [("a", ["a"]), ("a.b.c", ["a", "b", "c"]), (" a . b ", ["a", "b"]), ("a..b", ["a", "b"]), ("", [])],
)
def test_split_path(path: str, expected: list[str]) -> None:
    assert split_path(path) == expected


##############################
#     Tests for get_path     #
##############################


def test_get_path_nested() -> None:
    assert get_path(ISSUE, "fields.status.name") == "Done"


def test_get_path_segments() -> None:
    assert get_path(ISSUE, ["fields", "labels"]) == ["x"]


def test_get_path_null_value() -> None:
    """Test that an explicit null is found, not missing."""
    assert get_path(ISSUE, "fields.parent") is None
    assert has_path(ISSUE, "fields.parent")


@pytest.mark.parametrize("path", ["missing", "fields.missing", "fields.labels.0", "key.name"])
def test_get_path_missing(path: str) -> None:
    """Test that only objects are traversed."""
    assert get_path(ISSUE, path) is MISSING
    assert not has_path(ISSUE, path)


def test_get_path_default() -> None:
    assert get_path([], "a", default=None) is None


def test_missing_is_falsy() -> None:
    assert not MISSING
    assert repr(MISSING) == "MISSING"


################################################
#     Tests for ensure_object_path/set_path     #
################################################


def test_ensure_object_path_creates() -> None:
    root: dict = {}
    leaf = ensure_object_path(root, "a.b")
    leaf["c"] = 1
    assert root == {"a": {"b": {"c": 1}}}


def test_ensure_object_path_replaces_non_object() -> None:
    root = {"a": 1}
    ensure_object_path(root, "a.b")
    assert root == {"a": {"b": {}}}


def test_set_path() -> None:
    payload = {"fields": {"project": {"key": "ABC"}}}
    set_path(payload, "fields.summary", "Hello")
    assert payload == {"fields": {"project": {"key": "ABC"}, "summary": "Hello"}}


def test_set_path_overwrites() -> None:
    payload = {"a": {"b": 1}}
    set_path(payload, ["a", "b"], [1, 2])
    assert payload == {"a": {"b": [1, 2]}}


def test_set_path_empty() -> None:
    with pytest.raises(ValueError, match=r"path cannot be empty"):
        set_path({}, " . ", 1)


#######################################
#     Tests for parse_json_object     #
#######################################


def test_parse_json_object() -> None:
    assert parse_json_object('{"fields": {"summary": "x"}}', "--body") == {
        "fields": {"summary": "x"}
    }


def test_parse_json_object_invalid_json() -> None:
    with pytest.raises(ValueError, match=r"Failed to parse --body payload"):
        parse_json_object("{not json", "--body")


@pytest.mark.parametrize("payload", ["[1, 2]", '"text"', "42", "null"])
def test_parse_json_object_not_object(payload: str) -> None:
    with pytest.raises(ValueError, match=r"--body payload must be a JSON object."):
        parse_json_object(payload, "--body")


##########################################
#     Tests for has_meaningful_value     #
##########################################


@pytest.mark.parametrize("value", [0, False, "", "x", [1], {"a": 1}])
def test_has_meaningful_value_true(value: object) -> None:
    assert has_meaningful_value(value)


@pytest.mark.parametrize("value", [None, MISSING, [], {}])
def test_has_meaningful_value_false(value: object) -> None:
    assert not has_meaningful_value(value)


def test_dumps_compact() -> None:
    assert dumps_compact({"a": [1, "é"]}) == '{"a":[1,"é"]}'


def test_build_payload_keeps_number_literals() -> None:
    payload = parse_json_object('{"fields": {"estimate": 1.50}}', "--body")
    set_path(payload, "fields.weight", 2)
    assert dumps_compact(payload) == '{"fields":{"estimate":1.50,"weight":2}}'
