r"""Unit tests for the authorization header construction."""

from __future__ import annotations

import base64

from resproxy.core.auth import create_auth_header
from resproxy.core.config import AuthMode, Config

########################################
#     Tests for create_auth_header     #
########################################


def test_create_auth_header_basic() -> None:
    config = Config(site_url="https://example.test", email="user@example.com", api_token="token")
    scheme, value = create_auth_header(config)
    assert scheme == "Basic"
    assert base64.b64decode(value).decode() == "user@example.com:token"


def test_create_auth_header_bearer() -> None:
    config = Config(
        site_url="https://example.test", auth_mode=AuthMode.BEARER, bearer_token="abc.def"
    )
    assert create_auth_header(config) == ("Bearer", "abc.def")


def test_create_auth_header_basic_missing_credentials() -> None:
    """Test that missing credentials still produce a header."""
    scheme, value = create_auth_header(Config(site_url="https://example.test"))
    assert scheme == "Basic"
    assert base64.b64decode(value).decode() == ":"
