r"""Unit tests for the redaction helpers."""

from __future__ import annotations

import pytest

from resproxy.utils.redact import REDACTED, mask_email, mask_secret, redact_header, redact_headers

###################################
#     Tests for redact_header     #
###################################


@pytest.mark.parametrize("key", ["Authorization", "authorization", "Proxy-Authorization", "Cookie"])
def test_redact_header_sensitive(key: str) -> None:
    assert redact_header(key, "secret") == REDACTED


@pytest.mark.parametrize("key", ["Accept", "Content-Type", "User-Agent"])
def test_redact_header_plain(key: str) -> None:
    assert redact_header(key, "value") == "value"


def test_redact_headers() -> None:
    assert redact_headers({"Authorization": "Basic abc", "Accept": "application/json"}) == {
        "Authorization": "<redacted>",
        "Accept": "application/json",
    }


#################################
#     Tests for mask_secret     #
#################################


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("abcdef123", "ab***23"),
        ("abcde", "ab***de"),
        ("abcd", "****"),
        ("a", "*"),
        (None, "<not set>"),
        ("  ", "<not set>"),
    ],
)
def test_mask_secret(value: str | None, expected: str) -> None:
    assert mask_secret(value) == expected


################################
#     Tests for mask_email     #
################################


@pytest.mark.parametrize(
    ("email", "expected"),
    [
        ("jane.doe@example.com", "j***e@example.com"),
        ("ab@example.com", "a***b@example.com"),
        ("a@example.com", "***"),
        ("no-at-sign", "***"),
        (None, "<not set>"),
        ("", "<not set>"),
    ],
)
def test_mask_email(email: str | None, expected: str) -> None:
    assert mask_email(email) == expected
