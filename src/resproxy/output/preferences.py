r"""Output preferences shared by every request-producing command."""

from __future__ import annotations

__all__ = ["JsonStyle", "OutputFormat", "OutputPreferences"]

from dataclasses import dataclass
from enum import Enum


class OutputFormat(Enum):
    JSON = "json"
    JSONL = "jsonl"
    TEXT = "text"


class JsonStyle(Enum):
    PRETTY = "pretty"
    COMPACT = "compact"


@dataclass(frozen=True)
class OutputPreferences:
    """How an envelope is transformed and rendered.

    Args:
        format: The output format.
        json_style: Pretty or compact JSON.
        select: Comma-separated dot-paths to project, for example
            ``"key,fields.summary"``.
        filter: A ``field=value`` expression keeping matching array
            elements.
        sort: A ``field[:asc|desc]`` expression.
        limit: Maximum number of array elements to keep.
        cursor: Reserved output cursor token.
        page: Reserved output page number.
        all: Whether all pages were requested.
        plain: Render scalars as plain lines. Only valid with the text
            format.

    Raises:
        ValueError: If ``limit`` or ``page`` is negative, or ``plain`` is
            combined with a JSON format.
    """

    format: OutputFormat = OutputFormat.JSON
    json_style: JsonStyle = JsonStyle.PRETTY
    select: str | None = None
    filter: str | None = None
    sort: str | None = None
    limit: int | None = None
    cursor: str | None = None
    page: int | None = None
    all: bool = False
    plain: bool = False

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 0:
            msg = "--limit must be zero or greater."
            raise ValueError(msg)
        if self.page is not None and self.page < 0:
            msg = "--page must be zero or greater."
            raise ValueError(msg)
        if self.plain and self.format is not OutputFormat.TEXT:
            msg = "--plain requires --format text."
            raise ValueError(msg)

    @classmethod
    def from_flags(
        cls,
        format: str = "json",  # noqa: A002
        *,
        plain: bool = False,
        pretty: bool = False,
        compact: bool = False,
        select: str | None = None,
        filter: str | None = None,  # noqa: A002
        sort: str | None = None,
        limit: int | None = None,
        cursor: str | None = None,
        page: int | None = None,
        all: bool = False,  # noqa: A002
        format_specified: bool = False,
    ) -> OutputPreferences:
        """Resolve the preferences from raw command-line flag values.

        ``plain`` implies the text format unless another format was
        given explicitly.

        Raises:
            ValueError: With a user facing message when the flags are
                inconsistent.

        Example:
            ```pycon
            >>> from resproxy.output.preferences import OutputPreferences
            >>> prefs = OutputPreferences.from_flags("jsonl", compact=True, limit=5)
            >>> prefs.format, prefs.json_style, prefs.limit
            (<OutputFormat.JSONL: 'jsonl'>, <JsonStyle.COMPACT: 'compact'>, 5)
            >>> OutputPreferences.from_flags("text", pretty=True)
            Traceback (most recent call last):
            ...
            ValueError: --format text cannot be combined with --pretty or --compact.

            ```
        """
        try:
            output_format = OutputFormat(format.strip().lower())
        except ValueError as exc:
            msg = "--format must be one of: json, jsonl, text."
            raise ValueError(msg) from exc

        if pretty and compact:
            msg = "Use either --pretty or --compact, not both."
            raise ValueError(msg)
        if output_format is OutputFormat.TEXT and (pretty or compact):
            msg = "--format text cannot be combined with --pretty or --compact."
            raise ValueError(msg)
        if plain and format_specified and output_format is not OutputFormat.TEXT:
            msg = "--plain requires --format text."
            raise ValueError(msg)
        if plain:
            output_format = OutputFormat.TEXT

        return cls(
            format=output_format,
            json_style=JsonStyle.COMPACT if compact else JsonStyle.PRETTY,
            select=select,
            filter=filter,
            sort=sort,
            limit=limit,
            cursor=cursor,
            page=page,
            all=all,
            plain=plain,
        )
