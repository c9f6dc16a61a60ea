r"""Exceptions raised by the resproxy package."""

from __future__ import annotations

__all__ = ["ConfigError", "PaginationError", "ResproxyError", "StoredRequestError"]


class ResproxyError(Exception):
    """Base class for all the errors raised by resproxy."""


class ConfigError(ResproxyError, ValueError):
    """Raised when the runtime configuration is missing or invalid.

    Example:
        ```pycon
        >>> from resproxy.exceptions import ConfigError
        >>> raise ConfigError("RESPROXY_SITE_URL is required.")
        Traceback (most recent call last):
            ...
        resproxy.exceptions.ConfigError: RESPROXY_SITE_URL is required.

        ```
    """


class PaginationError(ResproxyError):
    """Raised when a page of a paginated response does not have the
    expected shape."""


class StoredRequestError(ResproxyError, ValueError):
    """Raised when a stored request snapshot cannot be loaded.

    Args:
        path: The path of the snapshot file.
        message: A descriptive error message.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path
