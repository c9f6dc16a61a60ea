r"""Retry policy, backoff strategy and clock abstraction.

Public API:
    - Clock: Protocol of the time source used while waiting
    - SystemClock: Clock backed by the system time
    - ExponentialBackoff: Exponential backoff calculation
    - RetryPolicy: Retry decisions and delays
"""

from __future__ import annotations

__all__ = ["Clock", "ExponentialBackoff", "RetryPolicy", "SystemClock"]

from resproxy.retry.backoff import ExponentialBackoff
from resproxy.retry.clock import Clock, SystemClock
from resproxy.retry.policy import RetryPolicy
