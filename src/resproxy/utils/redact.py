r"""Helpers to keep credentials out of logs and diagnostics."""

from __future__ import annotations

__all__ = ["REDACTED", "mask_email", "mask_secret", "redact_header", "redact_headers"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

REDACTED = "<redacted>"
NOT_SET = "<not set>"

_SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie"})


def redact_header(key: str, value: str) -> str:
    """Return the value to log for the header ``key``.

    Example:
        ```pycon
        >>> from resproxy.utils.redact import redact_header
        >>> redact_header("Authorization", "Basic abc")
        '<redacted>'
        >>> redact_header("Accept", "application/json")
        'application/json'

        ```
    """
    if key.lower() in _SENSITIVE_HEADERS:
        return REDACTED
    return value


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {key: redact_header(key, value) for key, value in headers.items()}


def mask_secret(value: str | None) -> str:
    """Mask a secret, keeping its first and last two characters.

    Example:
        ```pycon
        >>> from resproxy.utils.redact import mask_secret
        >>> mask_secret("abcdef123")
        'ab***23'
        >>> mask_secret("abc")
        '***'
        >>> mask_secret(None)
        '<not set>'

        ```
    """
    if value is None or not value.strip():
        return NOT_SET
    if len(value) <= 4:
        return "*" * len(value)
    return f"{value[:2]}***{value[-2:]}"


def mask_email(email: str | None) -> str:
    """Mask the local part of an email address.

    Example:
        ```pycon
        >>> from resproxy.utils.redact import mask_email
        >>> mask_email("jane.doe@example.com")
        'j***e@example.com'

        ```
    """
    if email is None or not email.strip():
        return NOT_SET
    at = email.find("@")
    if at <= 1:
        return "***"
    return f"{email[0]}***{email[at - 1:]}"
