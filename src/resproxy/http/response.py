r"""HTTP response handling utilities.

This module provides the pieces of response handling that do not depend
on the executor state: body parsing, saving a body to a file, request id
lookup, error construction and page extraction for paginated list
endpoints.
"""

from __future__ import annotations

__all__ = [
    "REQUEST_ID_HEADERS",
    "PageInfo",
    "build_combined_output",
    "build_http_error",
    "extract_page",
    "get_request_id",
    "is_success",
    "parse_payload",
    "save_body_to_file",
]

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from resproxy.envelope import ErrorInfo
from resproxy.errors import ErrorCode
from resproxy.exceptions import PaginationError
from resproxy.utils.json_text import loads_json

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)

REQUEST_ID_HEADERS = ("x-arequestid", "x-request-id", "request-id", "x-correlation-id")

HTTP_ERROR_HINT = "Re-run with verbose logging to inspect the request and response."


def is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code < 300


def parse_payload(response: httpx.Response, payload: bytes) -> Any:
    """Parse a response body.

    JSON is detected from the content type or from a leading ``{`` or
    ``[``. Fractional numbers keep their literal text, see
    ``loads_json``. A body that fails to parse as JSON is returned as
    text. An empty body gives ``None``.

    Example:
        ```pycon
        >>> import httpx
        >>> from resproxy.http.response import parse_payload
        >>> parse_payload(httpx.Response(200), b'{"ok": true}')
        {'ok': True}
        >>> parse_payload(httpx.Response(200), b"plain text")
        'plain text'
        >>> parse_payload(httpx.Response(204), b"") is None
        True

        ```
    """
    if not payload:
        return None
    text = payload.decode("utf-8", errors="replace")
    content_type = response.headers.get("Content-Type", "")
    looks_like_json = "json" in content_type.lower() or text.lstrip().startswith(("{", "["))
    if not looks_like_json:
        return text
    try:
        return loads_json(text)
    except json.JSONDecodeError:
        logger.debug("Response declared or looked like JSON but failed to parse")
        return text


def save_body_to_file(response: httpx.Response, payload: bytes, out_path: str) -> dict[str, Any]:
    """Write ``payload`` to ``out_path`` and describe the written file.

    Parent directories are created as needed.

    Returns:
        A descriptor ``{"file": ..., "bytes": ..., "contentType": ...}``.
    """
    target = Path(out_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("wb") as stream:
        stream.write(payload)
    logger.debug(f"Saved {len(payload)} bytes to {target}")
    return {
        "file": out_path,
        "bytes": len(payload),
        "contentType": response.headers.get("Content-Type"),
    }


def get_request_id(response: httpx.Response) -> str | None:
    """Return the first request-id-style header of ``response``."""
    for name in REQUEST_ID_HEADERS:
        value = response.headers.get(name)
        if value:
            return value
    return None


def build_http_error(response: httpx.Response, error_code: str, details: Any) -> ErrorInfo:
    """Build the error of a non-success response.

    Example:
        ```pycon
        >>> import httpx
        >>> from resproxy.http.response import build_http_error
        >>> build_http_error(httpx.Response(404), "not_found", None).message
        'HTTP 404 Not Found'

        ```
    """
    message = f"HTTP {response.status_code} {response.reason_phrase}".strip()
    return ErrorInfo(
        code=error_code or ErrorCode.UPSTREAM,
        message=message,
        details=details,
        hint=HTTP_ERROR_HINT,
    )


@dataclass(frozen=True)
class PageInfo:
    """What one page of a list endpoint says about the next one.

    Attributes:
        values: The elements of the page.
        next_start_at: The ``startAt`` of the next page.
        is_last: ``True`` if no page follows.
    """

    values: list[Any]
    next_start_at: int
    is_last: bool


def extract_page(root: Any, start_at: int) -> PageInfo:
    """Read the ``values`` of a page and decide whether it is the last.

    Completion is decided, in order, by a boolean ``isLast`` field, by a
    numeric ``total`` compared against ``startAt + maxResults``, and
    finally by an empty ``values`` array.

    Args:
        root: The parsed page document.
        start_at: The ``startAt`` sent for this page.

    Raises:
        PaginationError: If the page has no ``values`` array.

    Example:
        ```pycon
        >>> from resproxy.http.response import extract_page
        >>> page = extract_page({"startAt": 0, "maxResults": 1, "total": 2, "values": [1]}, 0)
        >>> page.next_start_at, page.is_last
        (1, False)

        ```
    """
    values = root.get("values") if isinstance(root, dict) else None
    if not isinstance(values, list):
        msg = "Paginated response does not contain a 'values' array."
        raise PaginationError(msg)

    server_start_at = _read_int(root, "startAt")
    max_results = _read_int(root, "maxResults")
    if max_results is None:
        max_results = len(values)
    base = server_start_at if server_start_at is not None else start_at
    next_start_at = base + max(1, max_results)

    is_last_flag = root.get("isLast")
    total = _read_int(root, "total")
    if isinstance(is_last_flag, bool):
        is_last = is_last_flag
    elif total is not None:
        is_last = next_start_at >= total
    else:
        is_last = len(values) == 0
    return PageInfo(values=values, next_start_at=next_start_at, is_last=is_last)


def build_combined_output(template: Any, items: list[Any]) -> dict[str, Any]:
    """Combine the first page with every accumulated element.

    Every key of ``template`` except ``values`` is kept; ``values`` is
    replaced with ``items``.
    """
    combined: dict[str, Any] = {}
    if isinstance(template, dict):
        combined.update((key, value) for key, value in template.items() if key != "values")
    combined["values"] = items
    return combined


def _read_int(root: dict[str, Any], key: str) -> int | None:
    value = root.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value
