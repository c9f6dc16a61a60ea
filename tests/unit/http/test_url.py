r"""Unit tests for URL construction."""

from __future__ import annotations

import pytest

from resproxy.http.url import build_url, normalize_path

####################################
#     Tests for normalize_path     #
####################################


@pytest.mark.parametrize(
    ("path", "expected"),
    [("rest/api/3/myself", "/rest/api/3/myself"), ("/rest/api/3/myself", "/rest/api/3/myself")],
)
def test_normalize_path(path: str, expected: str) -> None:
    assert normalize_path(path) == expected


@pytest.mark.parametrize("path", ["", "   "])
def test_normalize_path_empty(path: str) -> None:
    with pytest.raises(ValueError, match=r"path cannot be empty"):
        normalize_path(path)


###############################
#     Tests for build_url     #
###############################


def test_build_url_without_query() -> None:
    assert build_url("https://example.test", "rest/api/3/myself") == (
        "https://example.test/rest/api/3/myself"
    )


def test_build_url_strips_base_slash() -> None:
    assert build_url("https://example.test/", "/items") == "https://example.test/items"


def test_build_url_encodes_pairs() -> None:
    url = build_url("https://example.test", "/search", [("jql", "project = A&B"), ("fields", "a,b")])
    assert url == "https://example.test/search?jql=project%20%3D%20A%26B&fields=a%2Cb"


def test_build_url_encodes_unicode_and_keys() -> None:
    assert build_url("https://example.test", "/s", [("a b", "é")]) == (
        "https://example.test/s?a%20b=%C3%A9"
    )


def test_build_url_keeps_duplicate_keys() -> None:
    url = build_url("https://example.test", "/s", [("expand", "a"), ("expand", "b")])
    assert url == "https://example.test/s?expand=a&expand=b"


def test_build_url_appends_to_existing_query() -> None:
    url = build_url("https://example.test", "/items?expand=x", [("startAt", "50")])
    assert url == "https://example.test/items?expand=x&startAt=50"


@pytest.mark.parametrize("path", ["/items?", "/items?expand=x&"])
def test_build_url_existing_query_separator(path: str) -> None:
    assert build_url("https://example.test", path, [("a", "1")]).endswith(("?a=1", "&a=1"))
    assert "&&" not in build_url("https://example.test", path, [("a", "1")])
