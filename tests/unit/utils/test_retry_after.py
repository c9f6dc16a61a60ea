r"""Unit tests for Retry-After header parsing utilities."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from resproxy.utils.retry_after import parse_retry_after

NOW = datetime(2015, 10, 21, 7, 28, 0, tzinfo=timezone.utc)

#######################################
#     Tests for parse_retry_after     #
#######################################


@pytest.mark.parametrize(
    ("header", "seconds"),
    [("1", 1.0), ("0", 0.0), ("120", 120.0), ("3600", 3600.0), (" 2 ", 2.0), ("1.5", 1.5)],
)
def test_parse_retry_after_seconds(header: str, seconds: float) -> None:
    """Test parsing Retry-After header with delta seconds."""
    assert parse_retry_after(header) == seconds


@pytest.mark.parametrize("header", [None, "", "   ", "invalid", "not a number", "1.2.3", "nan", "inf"])
def test_parse_retry_after_none(header: str | None) -> None:
    """Test that absent or unusable values give None."""
    assert parse_retry_after(header) is None


def test_parse_retry_after_http_date() -> None:
    """Test parsing Retry-After header with HTTP-date format."""
    assert parse_retry_after("Wed, 21 Oct 2015 07:29:00 GMT", now=NOW) == 60.0


def test_parse_retry_after_http_date_in_past() -> None:
    """Test that a date in the past gives zero."""
    assert parse_retry_after("Wed, 21 Oct 2015 07:00:00 GMT", now=NOW) == 0.0


def test_parse_retry_after_http_date_wall_clock() -> None:
    """Test that a date far in the past without ``now`` gives zero."""
    assert parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT") == 0.0
