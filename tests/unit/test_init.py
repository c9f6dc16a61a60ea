r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import resproxy
from resproxy.http.executor import USER_AGENT


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(resproxy.__version__, str)


def test_package_version_format() -> None:
    # Should have at least one dot (e.g., "0.0.0" or "0.1.0")
    assert "." in resproxy.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in resproxy.__all__:
        assert hasattr(resproxy, name), f"{name} is in __all__ but not defined in module"


def test_user_agent_carries_version() -> None:
    assert USER_AGENT == f"resproxy/{resproxy.__version__}"
