r"""Parse and serialize JSON without rewriting number literals.

``json.loads`` turns ``1.50`` into ``1.5`` and ``1e2`` into ``100.0``,
so the text a server sent is lost before it is filtered, sorted or
printed. ``loads_json`` keeps every fractional or exponent literal as a
``JsonNumber`` carrying its original text, and ``dumps_json`` writes
that text back unchanged. Integer literals parse to ``int``; their
canonical form already matches the JSON grammar.
"""

from __future__ import annotations

__all__ = ["JsonNumber", "dumps_json", "loads_json"]

import json
from typing import Any


class JsonNumber(float):
    """A JSON number that remembers the literal it was parsed from.

    It compares and computes like a ``float``; ``raw`` holds the exact
    literal.

    Args:
        raw: The number literal. A ``float`` is accepted too and is
            represented with its shortest repr.

    Example:
        ```pycon
        >>> from resproxy.utils.json_text import JsonNumber
        >>> number = JsonNumber("1.50")
        >>> number.raw, number == 1.5
        ('1.50', True)

        ```
    """

    raw: str

    def __new__(cls, raw: str | float) -> JsonNumber:
        number = super().__new__(cls, raw)
        number.raw = raw if isinstance(raw, str) else float.__repr__(float(raw))
        return number

    def __repr__(self) -> str:
        return self.raw


def loads_json(text: str | bytes) -> Any:
    """Deserialize ``text`` keeping the literal of fractional numbers.

    Raises:
        json.JSONDecodeError: If ``text`` is not valid JSON.

    Example:
        ```pycon
        >>> from resproxy.utils.json_text import loads_json
        >>> loads_json('{"price": 1.50, "count": 2, "scale": 1e2}')
        {'price': 1.50, 'count': 2, 'scale': 1e2}

        ```
    """
    return json.loads(text, parse_float=JsonNumber)


def dumps_json(
    value: Any, *, indent: int | None = None, separators: tuple[str, str] | None = None
) -> str:
    """Serialize ``value`` like ``json.dumps(..., ensure_ascii=False)``,
    writing each ``JsonNumber`` with its original literal.

    Args:
        value: The JSON tree.
        indent: The indentation width, or ``None`` for a single line.
        separators: The ``(item, key)`` separators. The defaults are
            those of ``json.dumps``.

    Example:
        ```pycon
        >>> from resproxy.utils.json_text import dumps_json, loads_json
        >>> dumps_json(loads_json("[1.50, 1e2, 3]"), separators=(",", ":"))
        '[1.50,1e2,3]'
        >>> print(dumps_json({"a": [1]}, indent=2))
        {
          "a": [
            1
          ]
        }

        ```
    """
    if separators is None:
        separators = (",", ": ") if indent is not None else (", ", ": ")
    return _encode(value, indent, separators, 0)


def _encode(value: Any, indent: int | None, separators: tuple[str, str], level: int) -> str:
    if isinstance(value, JsonNumber):
        return value.raw
    item_separator, key_separator = separators
    if isinstance(value, dict):
        items = [
            f"{_encode_key(key)}{key_separator}{_encode(item, indent, separators, level + 1)}"
            for key, item in value.items()
        ]
        return _join("{", items, "}", indent, item_separator, level)
    if isinstance(value, (list, tuple)):
        items = [_encode(item, indent, separators, level + 1) for item in value]
        return _join("[", items, "]", indent, item_separator, level)
    return json.dumps(value, ensure_ascii=False)


def _encode_key(key: Any) -> str:
    if isinstance(key, JsonNumber):
        key = key.raw
    elif not isinstance(key, str):
        # Same coercion as json.dumps: true, null, 3, 1.5.
        key = json.dumps(key)
    return json.dumps(key, ensure_ascii=False)


def _join(
    opening: str,
    items: list[str],
    closing: str,
    indent: int | None,
    item_separator: str,
    level: int,
) -> str:
    if not items:
        return opening + closing
    if indent is None:
        return opening + item_separator.join(items) + closing
    inner = "\n" + " " * (indent * (level + 1))
    outer = "\n" + " " * (indent * level)
    return opening + inner + (item_separator + inner).join(items) + outer + closing
