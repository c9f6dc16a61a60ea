r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]


class ExponentialBackoff:
    """Exponential backoff strategy.

    Calculates delay as: base_delay * (2 ** attempt), with optional max_delay cap.

    Args:
        base_delay: The base delay in seconds. The actual delay is
            calculated as base_delay * (2 ** attempt).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from resproxy.retry.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.5)
        >>> backoff.calculate(0)  # First retry
        0.5
        >>> backoff.calculate(2)  # Third retry
        2.0
        >>> ExponentialBackoff(base_delay=1.0, max_delay=5.0).calculate(10)
        5.0

        ```
    """

    def __init__(self, base_delay: float, max_delay: float | None = None) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The retry number (0-indexed).

        Returns:
            The calculated delay: base_delay * (2 ** attempt),
            capped at max_delay if set.
        """
        delay = self.base_delay * (2**attempt)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
