r"""Time source used by the retry policy.

The retry policy never calls ``time.sleep`` directly. Tests inject a
fake clock to make backoff deterministic and instantaneous.
"""

from __future__ import annotations

__all__ = ["Clock", "SystemClock"]

import time
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Wall-clock time and delay."""

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""

    def sleep(self, seconds: float) -> None:
        """Suspend the current flow for ``seconds``."""


class SystemClock:
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)
