r"""Error taxonomy shared by every command.

This module maps HTTP status codes and exceptions to a pair of
(process exit code, error code). The exit codes are a fixed contract
with the shell: scripts rely on them to tell a missing resource from an
authentication problem or a network outage.
"""

from __future__ import annotations

__all__ = ["ErrorCode", "ExitCode", "from_exception", "from_http_status"]

from enum import IntEnum

import httpx


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    VALIDATION = 1
    AUTHENTICATION = 2
    NOT_FOUND = 3
    CONFLICT = 4
    NETWORK = 5
    INTERNAL = 10


class ErrorCode:
    """Machine readable error codes rendered in ``error.code``."""

    VALIDATION = "validation_error"
    AUTHENTICATION = "authentication_error"
    AUTHORIZATION = "authorization_error"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    NETWORK = "network_error"
    TIMEOUT = "timeout"
    INTERNAL = "internal_error"
    UPSTREAM = "upstream_error"


_STATUS_TABLE: dict[int, tuple[ExitCode, str]] = {
    400: (ExitCode.VALIDATION, ErrorCode.VALIDATION),
    401: (ExitCode.AUTHENTICATION, ErrorCode.AUTHENTICATION),
    403: (ExitCode.AUTHENTICATION, ErrorCode.AUTHORIZATION),
    404: (ExitCode.NOT_FOUND, ErrorCode.NOT_FOUND),
    408: (ExitCode.NETWORK, ErrorCode.TIMEOUT),
    409: (ExitCode.CONFLICT, ErrorCode.CONFLICT),
    422: (ExitCode.CONFLICT, ErrorCode.CONFLICT),
    429: (ExitCode.NETWORK, ErrorCode.NETWORK),
}


def from_http_status(status_code: int) -> tuple[ExitCode, str]:
    """Map an HTTP status code to an exit code and an error code.

    Args:
        status_code: The HTTP status code of a non-success response.

    Returns:
        A tuple ``(exit_code, error_code)``.

    Example:
        ```pycon
        >>> from resproxy.errors import from_http_status
        >>> from_http_status(404)
        (<ExitCode.NOT_FOUND: 3>, 'not_found')
        >>> from_http_status(503)
        (<ExitCode.INTERNAL: 10>, 'upstream_error')
        >>> from_http_status(418)
        (<ExitCode.VALIDATION: 1>, 'validation_error')

        ```
    """
    if status_code in _STATUS_TABLE:
        return _STATUS_TABLE[status_code]
    if status_code >= 500:
        return (ExitCode.INTERNAL, ErrorCode.UPSTREAM)
    return (ExitCode.VALIDATION, ErrorCode.VALIDATION)


def from_exception(exc: BaseException) -> tuple[ExitCode, str]:
    """Map an exception to an exit code and an error code.

    Timeouts and user interrupts are reported as ``timeout``, transport
    failures as ``network_error`` and anything else as
    ``internal_error``.

    Args:
        exc: The exception that escaped the request execution.

    Returns:
        A tuple ``(exit_code, error_code)``.

    Example:
        ```pycon
        >>> import httpx
        >>> from resproxy.errors import from_exception
        >>> from_exception(httpx.ReadTimeout("slow"))
        (<ExitCode.NETWORK: 5>, 'timeout')
        >>> from_exception(httpx.ConnectError("refused"))
        (<ExitCode.NETWORK: 5>, 'network_error')
        >>> from_exception(RuntimeError("bug"))
        (<ExitCode.INTERNAL: 10>, 'internal_error')

        ```
    """
    if isinstance(exc, (httpx.TimeoutException, KeyboardInterrupt)):
        return (ExitCode.NETWORK, ErrorCode.TIMEOUT)
    if isinstance(exc, httpx.TransportError):
        return (ExitCode.NETWORK, ErrorCode.NETWORK)
    return (ExitCode.INTERNAL, ErrorCode.INTERNAL)
