r"""Retry decisions and backoff delays.

The policy answers three questions for the executor: may this method be
retried at all, does this response or exception warrant another attempt,
and how long to wait before it. Waiting goes through a ``Clock`` so that
tests never sleep.
"""

from __future__ import annotations

__all__ = [
    "IDEMPOTENT_METHODS",
    "JITTER_MAX_SECONDS",
    "MAX_BACKOFF_SECONDS",
    "RetryPolicy",
]

import logging
import random
from typing import TYPE_CHECKING

import httpx

from resproxy.retry.backoff import ExponentialBackoff
from resproxy.retry.clock import SystemClock
from resproxy.utils.retry_after import parse_retry_after

if TYPE_CHECKING:
    from resproxy.core.config import Config
    from resproxy.retry.clock import Clock
    from resproxy.utils.structured_logging import VerboseLogger

logger: logging.Logger = logging.getLogger(__name__)

# Upper bound of any single wait, Retry-After included
MAX_BACKOFF_SECONDS = 30.0

# Jitter is drawn uniformly from [0, JITTER_MAX_SECONDS)
JITTER_MAX_SECONDS = 0.25

IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "DELETE"})


class RetryPolicy:
    """Stateless retry policy.

    Args:
        clock: The time source used to wait and to resolve HTTP-date
            ``Retry-After`` values. Defaults to ``SystemClock()``.
        rng: The random source of the jitter. Defaults to the
            process-wide ``random`` module.

    Example:
        ```pycon
        >>> from resproxy.retry.policy import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.is_method_retryable("GET", retry_non_idempotent=False)
        True
        >>> policy.is_method_retryable("POST", retry_non_idempotent=False)
        False

        ```
    """

    def __init__(self, clock: Clock | None = None, rng: random.Random | None = None) -> None:
        self.clock: Clock = clock if clock is not None else SystemClock()
        self._rng = rng

    def is_method_retryable(self, method: str, retry_non_idempotent: bool) -> bool:
        """Return ``True`` if requests with ``method`` may be retried.

        GET, PUT and DELETE are idempotent and always retryable. Other
        methods are retried only when ``retry_non_idempotent`` is set.
        """
        if method.upper() in IDEMPOTENT_METHODS:
            return True
        return retry_non_idempotent

    def should_retry_response(self, response: httpx.Response) -> bool:
        """Return ``True`` for 429 and 5xx responses."""
        return response.status_code == 429 or response.status_code >= 500

    def should_retry_exception(self, exc: BaseException) -> bool:
        """Return ``True`` for network and timeout failures.

        Any other exception is a programming error and is never
        retried.
        """
        return isinstance(exc, httpx.TransportError)

    def compute_delay(
        self,
        response: httpx.Response | None,
        attempt: int,
        config: Config,
    ) -> float:
        """Compute the delay before the attempt following ``attempt``.

        A 429 response with a usable ``Retry-After`` header is honored
        verbatim (clamped to ``[0, MAX_BACKOFF_SECONDS]``). Otherwise the
        delay is ``base * 2 ** (attempt - 1)`` plus a random jitter in
        ``[0, JITTER_MAX_SECONDS)``, capped at ``MAX_BACKOFF_SECONDS``.

        Args:
            response: The retryable response, or ``None`` when the
                attempt raised an exception.
            attempt: The attempt that just failed (1-indexed).
            config: The runtime configuration providing the base delay.

        Returns:
            The delay in seconds.
        """
        if response is not None and response.status_code == 429:
            retry_after = parse_retry_after(response.headers.get("Retry-After"), self.clock.now())
            if retry_after is not None:
                delay = min(max(0.0, retry_after), MAX_BACKOFF_SECONDS)
                logger.debug(f"Using Retry-After header value: {delay:.2f}s")
                return delay

        backoff = ExponentialBackoff(base_delay=config.retry_base_delay_ms / 1000.0)
        rng = self._rng if self._rng is not None else random
        jitter = rng.random() * JITTER_MAX_SECONDS
        return min(MAX_BACKOFF_SECONDS, backoff.calculate(max(0, attempt - 1)) + jitter)

    def wait(
        self,
        response: httpx.Response | None,
        attempt: int,
        config: Config,
        verbose_logger: VerboseLogger,
    ) -> float:
        """Compute the delay, report it and wait through the clock.

        Returns:
            The delay that was waited, in seconds.
        """
        delay = self.compute_delay(response, attempt, config)
        verbose_logger.verbose(f"Retry wait {delay * 1000:.0f}ms before attempt {attempt + 1}")
        self.clock.sleep(delay)
        return delay
