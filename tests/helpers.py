r"""Shared test helpers for the request executor tests."""

from __future__ import annotations

__all__ = ["FakeClock", "SequenceHandler", "json_response", "raise_error", "text_response"]

import json
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable


class FakeClock:
    """Clock returning a fixed time and recording every delay."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now if now is not None else datetime(2026, 1, 1, tzinfo=timezone.utc)
        self.delays: list[float] = []

    def now(self) -> datetime:
        return self._now

    def sleep(self, seconds: float) -> None:
        self.delays.append(seconds)
        self._now += timedelta(seconds=seconds)

    @property
    def last_delay(self) -> float | None:
        return self.delays[-1] if self.delays else None


class SequenceHandler:
    """Transport handler replaying one callable per request.

    The last handler is reused once the sequence is exhausted. Every
    received request is recorded.
    """

    def __init__(self, *handlers: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handlers = list(handlers)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        index = min(len(self.requests), len(self.handlers) - 1)
        self.requests.append(request)
        return self.handlers[index](request)

    @property
    def call_count(self) -> int:
        return len(self.requests)


def json_response(
    status_code: int, body: Any, headers: dict[str, str] | None = None
) -> Callable[[httpx.Request], httpx.Response]:
    """Return a handler answering ``body`` serialized as JSON."""

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(
            status_code,
            headers={"Content-Type": "application/json", **(headers or {})},
            content=json.dumps(body).encode("utf-8"),
        )

    return handler


def raise_error(exc: BaseException) -> Callable[[httpx.Request], httpx.Response]:
    """Return a handler raising ``exc``."""

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        raise exc

    return handler


def text_response(
    status_code: int, text: str, content_type: str = "text/plain"
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(
            status_code, headers={"Content-Type": content_type}, content=text.encode("utf-8")
        )

    return handler
