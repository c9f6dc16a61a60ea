r"""Unit tests for the exponential backoff strategy."""

from __future__ import annotations

import pytest

from resproxy.retry.backoff import ExponentialBackoff

########################################
#     Tests for ExponentialBackoff     #
########################################


@pytest.mark.parametrize(
    ("attempt", "expected"), [(0, 0.5), (1, 1.0), (2, 2.0), (3, 4.0), (4, 8.0)]
)
def test_exponential_backoff_calculate(attempt: int, expected: float) -> None:
    assert ExponentialBackoff(base_delay=0.5).calculate(attempt) == expected


def test_exponential_backoff_max_delay() -> None:
    backoff = ExponentialBackoff(base_delay=1.0, max_delay=5.0)
    assert backoff.calculate(2) == 4.0
    assert backoff.calculate(3) == 5.0
    assert backoff.calculate(10) == 5.0


def test_exponential_backoff_zero_base_delay() -> None:
    assert ExponentialBackoff(base_delay=0.0).calculate(5) == 0.0


def test_exponential_backoff_negative_base_delay() -> None:
    with pytest.raises(ValueError, match=r"base_delay must be non-negative"):
        ExponentialBackoff(base_delay=-1.0)


@pytest.mark.parametrize("max_delay", [0.0, -1.0])
def test_exponential_backoff_invalid_max_delay(max_delay: float) -> None:
    with pytest.raises(ValueError, match=r"max_delay must be positive if specified"):
        ExponentialBackoff(base_delay=1.0, max_delay=max_delay)
