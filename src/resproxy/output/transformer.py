r"""Filter, sort, limit and select applied to the ``data`` of an envelope.

The operations always run in the same order: filter, sort, limit,
select. Filter, sort and limit only apply to arrays; select applies to
an object or to each object of an array. Any other value passes through
unchanged.
"""

from __future__ import annotations

__all__ = ["extract_scalar_text", "to_scalar_string", "transform_data"]

import json
from typing import TYPE_CHECKING, Any

from resproxy.utils.json_path import MISSING, get_path, split_path
from resproxy.utils.json_text import JsonNumber, dumps_json

if TYPE_CHECKING:
    from resproxy.output.preferences import OutputPreferences


def transform_data(data: Any, preferences: OutputPreferences) -> Any:
    """Apply the preferences to ``data``.

    The input is never mutated.

    Example:
        ```pycon
        >>> from resproxy.output.preferences import OutputPreferences
        >>> from resproxy.output.transformer import transform_data
        >>> items = [{"name": "a", "score": 1}, {"name": "b", "score": 3}]
        >>> transform_data(items, OutputPreferences(sort="score:desc", limit=1, select="name"))
        [{'name': 'b'}]

        ```
    """
    if data is None:
        return None

    value = data
    if preferences.filter and preferences.filter.strip():
        value = apply_filter(value, preferences.filter)
    if preferences.sort and preferences.sort.strip():
        value = apply_sort(value, preferences.sort)
    if preferences.limit is not None:
        value = apply_limit(value, preferences.limit)
    if preferences.select and preferences.select.strip():
        value = apply_select(value, preferences.select)
    return value


def to_scalar_string(value: Any) -> str:
    """Render one JSON value as a single string.

    Numbers parsed from a response render their literal text.

    Example:
        ```pycon
        >>> from resproxy.output.transformer import to_scalar_string
        >>> from resproxy.utils.json_text import JsonNumber
        >>> to_scalar_string("open"), to_scalar_string(42), to_scalar_string(True)
        ('open', '42', 'true')
        >>> to_scalar_string(JsonNumber("1.50")), to_scalar_string(JsonNumber("1e2"))
        ('1.50', '1e2')
        >>> to_scalar_string(None)
        ''
        >>> to_scalar_string({"a": 1})
        '{"a":1}'

        ```
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, JsonNumber):
        return value.raw
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return dumps_json(value, separators=(",", ":"))


def extract_scalar_text(data: Any) -> str:
    """Flatten ``data`` to newline separated scalar strings.

    An array gives one line per element; anything else gives a single
    line.
    """
    if isinstance(data, list):
        return "\n".join(to_scalar_string(item) for item in data)
    return to_scalar_string(data)


def apply_filter(source: Any, expression: str) -> Any:
    if not isinstance(source, list):
        return source
    field, sep, expected = expression.partition("=")
    field = field.strip()
    if not sep or not field or not expected:
        return source
    expected = expected.strip().strip("'\"")
    return [
        item
        for item in source
        if (nested := get_path(item, field)) is not MISSING and to_scalar_string(nested) == expected
    ]


def apply_sort(source: Any, expression: str) -> Any:
    if not isinstance(source, list):
        return source
    parts = [part.strip() for part in expression.split(":") if part.strip()]
    if not parts:
        return source
    field = parts[0]
    descending = len(parts) > 1 and parts[1].lower() == "desc"

    def sort_key(item: Any) -> str:
        return to_scalar_string(get_path(item, field, default=None))

    return sorted(source, key=sort_key, reverse=descending)


def apply_limit(source: Any, limit: int) -> Any:
    if not isinstance(source, list) or limit < 0:
        return source
    return source[:limit]


def apply_select(source: Any, selectors_raw: str) -> Any:
    selectors = [selector.strip() for selector in selectors_raw.split(",") if selector.strip()]
    if not selectors:
        return source
    if isinstance(source, list):
        return [_select_object(item, selectors) for item in source]
    if isinstance(source, dict):
        return _select_object(source, selectors)
    return source


def _select_object(source: Any, selectors: list[str]) -> Any:
    if not isinstance(source, dict):
        return source
    projected: dict[str, Any] = {}
    for selector in selectors:
        selected = get_path(source, selector)
        if selected is MISSING:
            continue
        segments = split_path(selector)
        projected[segments[-1] if segments else selector] = selected
    return projected
