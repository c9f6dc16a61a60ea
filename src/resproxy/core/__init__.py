r"""Runtime configuration, validation and authentication."""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_BASE_DELAY_MS",
    "DEFAULT_TIMEOUT_SECONDS",
    "AuthMode",
    "Config",
    "create_auth_header",
    "validate_auth",
    "validate_retry_params",
    "validate_timeout",
]

from resproxy.core.auth import create_auth_header
from resproxy.core.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_BASE_DELAY_MS,
    DEFAULT_TIMEOUT_SECONDS,
    AuthMode,
    Config,
    validate_auth,
)
from resproxy.core.validation import validate_retry_params, validate_timeout
