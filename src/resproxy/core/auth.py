r"""Authorization header construction."""

from __future__ import annotations

__all__ = ["create_auth_header"]

import base64
from typing import TYPE_CHECKING

from resproxy.core.config import AuthMode
from resproxy.exceptions import ConfigError

if TYPE_CHECKING:
    from resproxy.core.config import Config


def create_auth_header(config: Config) -> tuple[str, str]:
    """Compute the ``Authorization`` header from the configuration.

    Args:
        config: The runtime configuration.

    Returns:
        A tuple ``(scheme, value)``. The header value is
        ``f"{scheme} {value}"``.

    Raises:
        ConfigError: If the auth mode is not supported.

    Example:
        ```pycon
        >>> from resproxy.core.auth import create_auth_header
        >>> from resproxy.core.config import AuthMode, Config
        >>> create_auth_header(Config("https://example.test", email="a@b.c", api_token="t"))
        ('Basic', 'YUBiLmM6dA==')
        >>> create_auth_header(
        ...     Config("https://example.test", auth_mode=AuthMode.BEARER, bearer_token="xyz")
        ... )
        ('Bearer', 'xyz')

        ```
    """
    if config.auth_mode is AuthMode.BASIC:
        raw = f"{config.email or ''}:{config.api_token or ''}".encode()
        return ("Basic", base64.b64encode(raw).decode("ascii"))
    if config.auth_mode is AuthMode.BEARER:
        return ("Bearer", config.bearer_token or "")
    msg = f"Unsupported auth mode {config.auth_mode!r}"
    raise ConfigError(msg)
