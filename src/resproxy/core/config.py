r"""Configuration dataclass and defaults for the request executor.

The configuration is loaded once per invocation, usually from the
environment, and is immutable afterwards.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_BASE_DELAY_MS",
    "DEFAULT_TIMEOUT_SECONDS",
    "ENV_PREFIX",
    "AuthMode",
    "Config",
    "validate_auth",
]

import os
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from resproxy.core.validation import validate_retry_params, validate_site_url, validate_timeout
from resproxy.exceptions import ConfigError
from resproxy.utils.redact import mask_email, mask_secret

if TYPE_CHECKING:
    from collections.abc import Mapping

# Default timeout in seconds for a single HTTP attempt
DEFAULT_TIMEOUT_SECONDS = 100

# Default maximum number of retry attempts
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 5

# Default base delay for exponential backoff
# Wait time = base * 2 ** (attempt - 1) + jitter
# With 500: 1st retry waits ~0.5s, 2nd ~1s, 3rd ~2s
DEFAULT_RETRY_BASE_DELAY_MS = 500

ENV_PREFIX = "RESPROXY_"


class AuthMode(Enum):
    """Supported authentication modes."""

    BASIC = "basic"
    BEARER = "bearer"


@dataclass(frozen=True)
class Config:
    """Runtime configuration of the request executor.

    Args:
        site_url: Absolute base URL of the wrapped API, without a
            trailing slash.
        auth_mode: The authentication mode.
        email: Account email used by basic auth.
        api_token: API token used by basic auth.
        bearer_token: Token used by bearer auth.
        timeout_seconds: Timeout of one HTTP attempt. Must be > 0.
        max_retries: Maximum number of retries. Must be >= 0.
        retry_base_delay_ms: Base delay of the exponential backoff in
            milliseconds. Must be > 0.

    Example:
        ```pycon
        >>> from resproxy.core.config import Config
        >>> config = Config(site_url="https://example.test/", email="a@b.c", api_token="t")
        >>> config.site_url
        'https://example.test'
        >>> config.max_retries
        5

        ```
    """

    site_url: str
    auth_mode: AuthMode = AuthMode.BASIC
    email: str | None = None
    api_token: str | None = None
    bearer_token: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_base_delay_ms: int = DEFAULT_RETRY_BASE_DELAY_MS

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        site_url = self.site_url.strip().rstrip("/")
        validate_site_url(site_url)
        object.__setattr__(self, "site_url", site_url)
        validate_timeout(self.timeout_seconds)
        validate_retry_params(
            max_retries=self.max_retries,
            retry_base_delay_ms=self.retry_base_delay_ms,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Load the configuration from environment variables.

        Args:
            environ: The variables to read. Defaults to ``os.environ``.

        Returns:
            The loaded configuration.

        Raises:
            ConfigError: If a variable is missing or invalid.

        Example:
            ```pycon
            >>> from resproxy.core.config import Config
            >>> config = Config.from_env(
            ...     {"RESPROXY_SITE_URL": "https://example.test", "RESPROXY_MAX_RETRIES": "2"}
            ... )
            >>> config.max_retries
            2

            ```
        """
        env = os.environ if environ is None else environ

        site_url = _get(env, "SITE_URL")
        if site_url is None:
            msg = f"{ENV_PREFIX}SITE_URL is required."
            raise ConfigError(msg)
        try:
            validate_site_url(site_url.strip().rstrip("/"))
        except ValueError as exc:
            msg = f"{ENV_PREFIX}SITE_URL must be a valid absolute http/https URL."
            raise ConfigError(msg) from exc

        auth_mode_raw = _get(env, "AUTH_MODE")
        auth_mode = AuthMode.BASIC
        if auth_mode_raw is not None:
            try:
                auth_mode = AuthMode(auth_mode_raw.strip().lower())
            except ValueError as exc:
                msg = f"{ENV_PREFIX}AUTH_MODE must be one of: basic, bearer."
                raise ConfigError(msg) from exc

        return cls(
            site_url=site_url,
            auth_mode=auth_mode,
            email=_get(env, "EMAIL"),
            api_token=_get(env, "API_TOKEN"),
            bearer_token=_get(env, "BEARER_TOKEN"),
            timeout_seconds=_read_int(env, "TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS, positive=True),
            max_retries=_read_int(env, "MAX_RETRIES", DEFAULT_MAX_RETRIES, positive=False),
            retry_base_delay_ms=_read_int(
                env, "RETRY_BASE_DELAY_MS", DEFAULT_RETRY_BASE_DELAY_MS, positive=True
            ),
        )

    def describe(self) -> dict[str, Any]:
        """Return a redacted view of the configuration for diagnostics."""
        return {
            "siteUrl": self.site_url,
            "authMode": self.auth_mode.value,
            "email": mask_email(self.email),
            "apiToken": mask_secret(self.api_token),
            "bearerToken": mask_secret(self.bearer_token),
            "timeoutSeconds": self.timeout_seconds,
            "maxRetries": self.max_retries,
            "retryBaseDelayMs": self.retry_base_delay_ms,
        }


def validate_auth(config: Config) -> None:
    """Check that the credentials required by the auth mode are set.

    Raises:
        ConfigError: If a required credential is missing.
    """
    if config.auth_mode is AuthMode.BASIC:
        if not config.email or not config.email.strip():
            msg = f"{ENV_PREFIX}EMAIL is required for basic auth."
            raise ConfigError(msg)
        if not config.api_token or not config.api_token.strip():
            msg = f"{ENV_PREFIX}API_TOKEN is required for basic auth."
            raise ConfigError(msg)
        return
    if not config.bearer_token or not config.bearer_token.strip():
        msg = f"{ENV_PREFIX}BEARER_TOKEN is required for bearer auth."
        raise ConfigError(msg)


def _get(env: Mapping[str, str], name: str) -> str | None:
    value = env.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value


def _read_int(env: Mapping[str, str], name: str, fallback: int, *, positive: bool) -> int:
    raw = _get(env, name)
    if raw is None:
        return fallback
    try:
        value = int(raw.strip())
    except ValueError as exc:
        msg = f"{ENV_PREFIX}{name} must be an integer."
        raise ConfigError(msg) from exc
    if positive and value <= 0:
        msg = f"{ENV_PREFIX}{name} must be greater than zero."
        raise ConfigError(msg)
    if not positive and value < 0:
        msg = f"{ENV_PREFIX}{name} must be zero or greater."
        raise ConfigError(msg)
    return value
