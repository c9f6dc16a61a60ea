r"""Helpers to read and build JSON trees with dot-separated paths.

JSON values are represented with the plain Python types produced by
``loads_json``: ``dict``, ``list``, ``str``, ``int``, ``float`` (a
``JsonNumber`` for parsed fractional literals), ``bool`` and ``None``.

``split_path``, ``get_path`` and ``has_path`` serve the output
transformer, which reads filter, sort and select fields from response
data. The builders ``set_path``, ``ensure_object_path``,
``parse_json_object``, ``has_meaningful_value`` and ``dumps_compact``
serve callers that assemble a request body before handing it to the
executor: a base payload parsed from a command option is completed with
a few assignments, for example ``set_path(payload, "fields.summary",
"Hi")``, and sent as compact JSON.
"""

from __future__ import annotations

__all__ = [
    "JsonValue",
    "MISSING",
    "dumps_compact",
    "ensure_object_path",
    "get_path",
    "has_meaningful_value",
    "has_path",
    "parse_json_object",
    "set_path",
    "split_path",
]

import json
from typing import Any, Union

from resproxy.utils.json_text import dumps_json, loads_json

JsonValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def split_path(path: str) -> list[str]:
    """Split a dot-separated path, dropping empty segments.

    Example:
        ```pycon
        >>> from resproxy.utils.json_path import split_path
        >>> split_path(" fields. status .name")
        ['fields', 'status', 'name']

        ```
    """
    return [segment.strip() for segment in path.split(".") if segment.strip()]


def get_path(value: JsonValue, path: str | list[str], default: Any = MISSING) -> Any:
    """Look up a nested value through objects only.

    Args:
        value: The JSON tree.
        path: A dot-separated path or a list of segments.
        default: Returned when a segment is missing or a non-object is
            traversed.

    Example:
        ```pycon
        >>> from resproxy.utils.json_path import get_path
        >>> get_path({"fields": {"status": {"name": "Done"}}}, "fields.status.name")
        'Done'
        >>> get_path({"fields": []}, "fields.status", default=None) is None
        True

        ```
    """
    segments = split_path(path) if isinstance(path, str) else path
    current = value
    for segment in segments:
        if not isinstance(current, dict) or segment not in current:
            return default
        current = current[segment]
    return current


def has_path(value: JsonValue, path: str | list[str]) -> bool:
    return get_path(value, path) is not MISSING


def ensure_object_path(root: dict[str, Any], path: str | list[str]) -> dict[str, Any]:
    """Return the object at ``path``, creating intermediate objects.

    A segment holding a non-object value is replaced with a new object.
    """
    segments = split_path(path) if isinstance(path, str) else path
    current = root
    for segment in segments:
        nested = current.get(segment)
        if not isinstance(nested, dict):
            nested = {}
            current[segment] = nested
        current = nested
    return current


def set_path(root: dict[str, Any], path: str | list[str], value: JsonValue) -> None:
    """Assign ``value`` at ``path``, creating intermediate objects.

    Example:
        ```pycon
        >>> from resproxy.utils.json_path import set_path
        >>> payload = {"fields": {"project": {"key": "ABC"}}}
        >>> set_path(payload, "fields.summary", "Hello")
        >>> payload
        {'fields': {'project': {'key': 'ABC'}, 'summary': 'Hello'}}

        ```

    Raises:
        ValueError: If ``path`` is empty.
    """
    segments = split_path(path) if isinstance(path, str) else list(path)
    if not segments:
        msg = "path cannot be empty"
        raise ValueError(msg)
    parent = ensure_object_path(root, segments[:-1])
    parent[segments[-1]] = value


def parse_json_object(payload: str, option_name: str) -> dict[str, Any]:
    """Parse ``payload`` and check that it is a JSON object.

    Args:
        payload: The JSON text.
        option_name: The name of the option the payload came from, used
            in error messages.

    Raises:
        ValueError: If the payload is not valid JSON or not an object.
    """
    try:
        value = loads_json(payload)
    except json.JSONDecodeError as exc:
        msg = f"Failed to parse {option_name} payload: {exc}"
        raise ValueError(msg) from exc
    if not isinstance(value, dict):
        msg = f"{option_name} payload must be a JSON object."
        raise ValueError(msg)
    return value


def has_meaningful_value(value: Any) -> bool:
    """Return ``True`` unless ``value`` is missing, null or an empty
    container."""
    if value is None or value is MISSING:
        return False
    if isinstance(value, (dict, list)):
        return len(value) > 0
    return True


def dumps_compact(value: JsonValue) -> str:
    return dumps_json(value, separators=(",", ":"))
