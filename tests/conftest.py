"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock for rate limiter tests
- Isolated rate limiter instances
"""

import pytest

from src.domain.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    """Implements Clock protocol with manually advanced time."""

    def __init__(self, start_ms: float = 1_000_000.0) -> None:
        self.current_ms = start_ms

    def now_ms(self) -> float:
        return self.current_ms

    def advance(self, ms: float) -> None:
        self.current_ms += ms


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen until a test advances it."""
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> SlidingWindowRateLimiter:
    """Fresh limiter per test, driven by the fake clock."""
    return SlidingWindowRateLimiter(clock=clock)
