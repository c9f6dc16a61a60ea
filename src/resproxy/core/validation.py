r"""Parameter validation utilities for the runtime configuration.

This module provides validation functions for the configuration values
to ensure they meet the required constraints before being used by the
request executor.
"""

from __future__ import annotations

__all__ = ["validate_retry_params", "validate_site_url", "validate_timeout"]

from urllib.parse import urlsplit


def validate_timeout(timeout_seconds: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout_seconds: Maximum seconds to wait for a server response.
            Must be > 0.

    Raises:
        ValueError: If ``timeout_seconds`` is <= 0.

    Example:
        ```pycon
        >>> from resproxy.core.validation import validate_timeout
        >>> validate_timeout(10)
        >>> validate_timeout(0)
        Traceback (most recent call last):
        ...
        ValueError: timeout_seconds must be > 0, got 0

        ```
    """
    if timeout_seconds <= 0:
        msg = f"timeout_seconds must be > 0, got {timeout_seconds}"
        raise ValueError(msg)


def validate_retry_params(max_retries: int, retry_base_delay_ms: int) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retry attempts for failed requests.
            Must be >= 0. A value of 0 means no retries (only the initial
            attempt).
        retry_base_delay_ms: Base delay of the exponential backoff in
            milliseconds. Must be > 0.

    Raises:
        ValueError: If ``max_retries`` is negative or
            ``retry_base_delay_ms`` is non-positive.

    Example:
        ```pycon
        >>> from resproxy.core.validation import validate_retry_params
        >>> validate_retry_params(max_retries=3, retry_base_delay_ms=500)
        >>> validate_retry_params(max_retries=-1, retry_base_delay_ms=500)
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 0, got -1

        ```
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if retry_base_delay_ms <= 0:
        msg = f"retry_base_delay_ms must be > 0, got {retry_base_delay_ms}"
        raise ValueError(msg)


def validate_site_url(site_url: str) -> None:
    """Validate that ``site_url`` is an absolute http or https URL.

    Raises:
        ValueError: If the URL is relative or uses another scheme.
    """
    parts = urlsplit(site_url)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        msg = f"site_url must be an absolute http/https URL, got {site_url!r}"
        raise ValueError(msg)
