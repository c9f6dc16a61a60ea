r"""Unit tests for the error taxonomy."""

from __future__ import annotations

import httpx
import pytest

from resproxy.errors import ErrorCode, ExitCode, from_exception, from_http_status

######################################
#     Tests for from_http_status     #
######################################


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (400, (ExitCode.VALIDATION, "validation_error")),
        (401, (ExitCode.AUTHENTICATION, "authentication_error")),
        (403, (ExitCode.AUTHENTICATION, "authorization_error")),
        (404, (ExitCode.NOT_FOUND, "not_found")),
        (408, (ExitCode.NETWORK, "timeout")),
        (409, (ExitCode.CONFLICT, "conflict")),
        (422, (ExitCode.CONFLICT, "conflict")),
        (429, (ExitCode.NETWORK, "network_error")),
        (500, (ExitCode.INTERNAL, "upstream_error")),
        (502, (ExitCode.INTERNAL, "upstream_error")),
        (599, (ExitCode.INTERNAL, "upstream_error")),
    ],
)
def test_from_http_status(status_code: int, expected: tuple[ExitCode, str]) -> None:
    """Test the documented status code table."""
    assert from_http_status(status_code) == expected


@pytest.mark.parametrize("status_code", [300, 302, 405, 410, 418, 451])
def test_from_http_status_default(status_code: int) -> None:
    """Test that unlisted statuses fall back to a validation error."""
    assert from_http_status(status_code) == (ExitCode.VALIDATION, ErrorCode.VALIDATION)


####################################
#     Tests for from_exception     #
####################################


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ReadTimeout("read timed out"),
        httpx.ConnectTimeout("connect timed out"),
        httpx.PoolTimeout("pool timed out"),
        KeyboardInterrupt(),
    ],
)
def test_from_exception_timeout(exc: BaseException) -> None:
    """Test that timeouts and interrupts map to ``timeout``."""
    assert from_exception(exc) == (ExitCode.NETWORK, ErrorCode.TIMEOUT)


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("connection refused"),
        httpx.ReadError("connection reset"),
        httpx.RemoteProtocolError("bad response"),
    ],
)
def test_from_exception_network(exc: Exception) -> None:
    """Test that transport failures map to ``network_error``."""
    assert from_exception(exc) == (ExitCode.NETWORK, ErrorCode.NETWORK)


@pytest.mark.parametrize("exc", [RuntimeError("bug"), ValueError("bad"), KeyError("key")])
def test_from_exception_internal(exc: Exception) -> None:
    """Test that any other exception maps to ``internal_error``."""
    assert from_exception(exc) == (ExitCode.INTERNAL, ErrorCode.INTERNAL)


def test_exit_code_values() -> None:
    """Test that exit codes are a fixed contract."""
    assert [int(code) for code in ExitCode] == [0, 1, 2, 3, 4, 5, 10]
