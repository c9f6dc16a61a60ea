r"""Logging utilities.

This module provides the ``VerboseLogger`` capability handed to the
request executor, a helper to attach a stderr handler to the package
logger and an opt-in JSON formatter for machine readable diagnostics.

Example:
    Enable verbose diagnostics for one invocation:

    ```python
    from resproxy.utils.structured_logging import VerboseLogger, configure_logging

    configure_logging(verbose=True, structured=True)
    logger = VerboseLogger(enabled=True)
    logger.verbose("Sending GET https://example.test/rest/api/3/myself")
    ```
"""

from __future__ import annotations

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "StructuredFormatter",
    "VerboseLogger",
    "configure_logging",
]

import json
import logging
import sys
import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing import TextIO

PACKAGE_LOGGER_NAME = "resproxy"

_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


class VerboseLogger:
    """Invocation scoped logger exposing a single ``verbose`` capability.

    Messages are forwarded to the package logger at DEBUG level only
    when the logger is enabled, so the executor never has to check a
    verbosity flag itself.

    Args:
        enabled: Whether verbose messages are emitted.
        logger: The logger receiving the messages. Defaults to the
            ``resproxy`` logger.

    Example:
        ```pycon
        >>> from resproxy.utils.structured_logging import VerboseLogger
        >>> logger = VerboseLogger(enabled=False)
        >>> logger.verbose("not emitted")
        >>> logger.enabled
        False

        ```
    """

    def __init__(self, enabled: bool = False, logger: logging.Logger | None = None) -> None:
        self.enabled = enabled
        self._logger = logger if logger is not None else logging.getLogger(PACKAGE_LOGGER_NAME)

    def verbose(self, message: str) -> None:
        if self.enabled:
            self._logger.debug(message)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record is rendered as one JSON object with the fields
    ``timestamp``, ``level``, ``logger``, ``message``, ``module``,
    ``function`` and ``line``, plus any field passed through ``extra``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = value
        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def configure_logging(
    verbose: bool,
    structured: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a handler to the package logger.

    Diagnostics go to stderr so that stdout only carries the rendered
    envelope.

    Args:
        verbose: If ``True`` the package logger emits DEBUG records,
            otherwise only warnings and errors.
        structured: If ``True`` records are rendered as JSON lines.
        stream: The stream to write to. Defaults to ``sys.stderr``.

    Returns:
        The installed handler.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler
