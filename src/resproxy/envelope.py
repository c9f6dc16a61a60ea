r"""Normalized success/error envelope rendered for every request.

Every command prints one envelope of the shape
``{"success": ..., "data": ..., "error": ..., "meta": ...}``. Exactly
one of ``data`` and ``error`` is meaningful: ``error`` is ``None`` on
success and ``data`` is ``None`` on failure.
"""

from __future__ import annotations

__all__ = ["ENVELOPE_VERSION", "Envelope", "ErrorInfo", "Meta"]

from dataclasses import dataclass, field, replace
from typing import Any

ENVELOPE_VERSION = "1.0"


@dataclass(frozen=True)
class ErrorInfo:
    """Error payload of a failing envelope.

    Args:
        code: The error code, one of the ``ErrorCode`` constants.
        message: A human readable message.
        details: Optional structured details, for example the parsed
            body of an error response.
        hint: Optional hint on how to investigate the failure.
    """

    code: str
    message: str
    details: Any = None
    hint: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "hint": self.hint,
        }


@dataclass(frozen=True)
class Meta:
    """Observational metadata. It never affects control flow."""

    version: str = ENVELOPE_VERSION
    request_id: str | None = None
    duration_ms: int | None = None
    status_code: int | None = None
    method: str | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "requestId": self.request_id,
            "durationMs": self.duration_ms,
            "statusCode": self.status_code,
            "method": self.method,
            "path": self.path,
        }


@dataclass(frozen=True)
class Envelope:
    """The normalized response wrapper.

    Example:
        ```pycon
        >>> from resproxy.envelope import Envelope
        >>> Envelope.ok({"id": 1}).to_dict()
        {'success': True, 'data': {'id': 1}, 'error': None, 'meta': {'version': '1.0', 'requestId': None, 'durationMs': None, 'statusCode': None, 'method': None, 'path': None}}

        ```
    """

    success: bool
    data: Any = None
    error: ErrorInfo | None = None
    meta: Meta = field(default_factory=Meta)

    @classmethod
    def ok(cls, data: Any, meta: Meta | None = None) -> Envelope:
        return cls(success=True, data=data, error=None, meta=meta or Meta())

    @classmethod
    def fail(cls, error: ErrorInfo, meta: Meta | None = None) -> Envelope:
        return cls(success=False, data=None, error=error, meta=meta or Meta())

    def with_data(self, data: Any) -> Envelope:
        """Return a copy of the envelope carrying ``data``."""
        return replace(self, data=data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "data": self.data,
            "error": None if self.error is None else self.error.to_dict(),
            "meta": self.meta.to_dict(),
        }
