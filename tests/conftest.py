from __future__ import annotations

import io
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import httpx
import pytest

from resproxy.core.config import Config
from resproxy.http.executor import RequestExecutor
from resproxy.retry.policy import RetryPolicy
from tests.helpers import FakeClock, SequenceHandler

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a clock that records delays instead of sleeping."""
    return FakeClock(datetime(2026, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def config() -> Config:
    """Create a basic auth configuration with one retry and a 10ms base
    delay."""
    return Config(
        site_url="https://example.test",
        email="user@example.com",
        api_token="token",
        timeout_seconds=30,
        max_retries=1,
        retry_base_delay_ms=10,
    )


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_executor(
    fake_clock: FakeClock, stdout: io.StringIO
) -> Callable[..., tuple[RequestExecutor, SequenceHandler]]:
    """Create an executor whose transport replays the given handlers."""

    def factory(
        *handlers: Callable[[httpx.Request], httpx.Response],
    ) -> tuple[RequestExecutor, SequenceHandler]:
        sequence = SequenceHandler(*handlers)
        executor = RequestExecutor(
            client=httpx.Client(transport=httpx.MockTransport(sequence)),
            retry_policy=RetryPolicy(clock=fake_clock),
            stdout=stdout,
        )
        return executor, sequence

    return factory
