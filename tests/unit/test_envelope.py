r"""Unit tests for the envelope model."""

from __future__ import annotations

import pytest

from resproxy.envelope import ENVELOPE_VERSION, Envelope, ErrorInfo, Meta

##############################
#     Tests for Envelope     #
##############################


def test_envelope_ok_to_dict() -> None:
    """Test the wire shape of a successful envelope."""
    envelope = Envelope.ok(
        {"id": 1},
        Meta(request_id="req-1", duration_ms=12, status_code=200, method="GET", path="/items"),
    )
    assert envelope.to_dict() == {
        "success": True,
        "data": {"id": 1},
        "error": None,
        "meta": {
            "version": "1.0",
            "requestId": "req-1",
            "durationMs": 12,
            "statusCode": 200,
            "method": "GET",
            "path": "/items",
        },
    }


def test_envelope_fail_to_dict() -> None:
    """Test the wire shape of a failing envelope."""
    envelope = Envelope.fail(ErrorInfo(code="not_found", message="HTTP 404 Not Found"))
    assert envelope.to_dict() == {
        "success": False,
        "data": None,
        "error": {
            "code": "not_found",
            "message": "HTTP 404 Not Found",
            "details": None,
            "hint": None,
        },
        "meta": {
            "version": "1.0",
            "requestId": None,
            "durationMs": None,
            "statusCode": None,
            "method": None,
            "path": None,
        },
    }


def test_envelope_default_meta_version() -> None:
    assert Envelope(success=True).meta.version == ENVELOPE_VERSION


def test_envelope_with_data() -> None:
    """Test that ``with_data`` returns a copy and keeps the meta."""
    meta = Meta(status_code=200)
    envelope = Envelope.ok([1, 2, 3], meta)
    copy = envelope.with_data([1])
    assert copy.data == [1]
    assert copy.meta is meta
    assert envelope.data == [1, 2, 3]


def test_envelope_is_frozen() -> None:
    envelope = Envelope.ok(None)
    with pytest.raises(AttributeError):
        envelope.success = False  # type: ignore[misc]
