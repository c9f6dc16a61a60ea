r"""Retry-After header parsing utilities.

This module provides functions for parsing the Retry-After header value
from HTTP responses according to RFC 7231.
"""

from __future__ import annotations

__all__ = ["parse_retry_after"]

import logging
import math
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(
    retry_after_header: str | None,
    now: datetime | None = None,
) -> float | None:
    """Parse the Retry-After header value from an HTTP response.

    The Retry-After header can be specified in two formats according to RFC 7231:
    1. A number of seconds to wait (e.g., "120")
    2. An HTTP-date in RFC 5322 format (e.g., "Wed, 21 Oct 2015 07:28:00 GMT")

    Args:
        retry_after_header: The value of the Retry-After header as a string,
            or None if the header is not present in the response.
        now: The current UTC time used to turn an HTTP-date into a delay.
            Defaults to the wall clock.

    Returns:
        The number of seconds to wait before retrying, or None if the
        header is absent or cannot be parsed. Dates in the past give 0.0.

    Example:
        ```pycon
        >>> from resproxy.utils.retry_after import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("invalid") is None
        True

        ```
    """
    if retry_after_header is None or not retry_after_header.strip():
        return None
    value = retry_after_header.strip()

    with suppress(ValueError):
        seconds = float(value)
        return seconds if math.isfinite(seconds) else None

    try:
        retry_date: datetime = parsedate_to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Failed to parse Retry-After header: {retry_after_header!r}")
        return None
    if retry_date.tzinfo is None:
        retry_date = retry_date.replace(tzinfo=timezone.utc)
    current = now if now is not None else datetime.now(timezone.utc)
    return max(0.0, (retry_date - current).total_seconds())
