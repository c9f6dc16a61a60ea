r"""URL construction from a base site URL, a path and query pairs."""

from __future__ import annotations

__all__ = ["build_url", "normalize_path"]

from typing import TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from collections.abc import Iterable


def normalize_path(path: str) -> str:
    """Return ``path`` with a leading slash.

    Raises:
        ValueError: If ``path`` is empty.

    Example:
        ```pycon
        >>> from resproxy.http.url import normalize_path
        >>> normalize_path("rest/api/3/myself")
        '/rest/api/3/myself'

        ```
    """
    if not path or not path.strip():
        msg = "path cannot be empty"
        raise ValueError(msg)
    return path if path.startswith("/") else "/" + path


def build_url(base_url: str, path: str, query: Iterable[tuple[str, str]] = ()) -> str:
    """Join the base URL and the path, then append the query pairs.

    Keys and values are percent-encoded. Duplicate keys are kept in
    order. A query already present in ``path`` is preserved.

    Example:
        ```pycon
        >>> from resproxy.http.url import build_url
        >>> build_url("https://example.test/", "/rest/api/3/search", [("jql", "project = A")])
        'https://example.test/rest/api/3/search?jql=project%20%3D%20A'
        >>> build_url("https://example.test", "items?expand=x", [("startAt", "50")])
        'https://example.test/items?expand=x&startAt=50'

        ```
    """
    url = base_url.rstrip("/") + normalize_path(path)
    query_text = "&".join(f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in query)
    if not query_text:
        return url
    if "?" not in url:
        return f"{url}?{query_text}"
    if url.endswith(("?", "&")):
        return url + query_text
    return f"{url}&{query_text}"
