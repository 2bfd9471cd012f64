from __future__ import annotations

import pytest

from conftest import ManualClock
from storefront.core.errors import RateLimitError
from storefront.core.rate_limiter import RateLimiter


def test_allows_up_to_limit_then_refuses():
    limiter = RateLimiter(limit=3, window_seconds=60, clock=ManualClock())
    for _ in range(3):
        limiter.check("ip")
    with pytest.raises(RateLimitError):
        limiter.check("ip")


def test_window_slides():
    clock = ManualClock()
    limiter = RateLimiter(limit=2, window_seconds=60, clock=clock)
    limiter.check("ip")
    clock.advance(30)
    limiter.check("ip")
    clock.advance(31)
    # the first hit fell out of the window, the second is still inside it
    limiter.check("ip")
    with pytest.raises(RateLimitError):
        limiter.check("ip")


def test_refused_attempts_do_not_extend_the_window():
    clock = ManualClock()
    limiter = RateLimiter(limit=1, window_seconds=10, clock=clock)
    limiter.check("ip")
    for _ in range(5):
        clock.advance(1)
        with pytest.raises(RateLimitError):
            limiter.check("ip")
    clock.advance(5)
    limiter.check("ip")


def test_keys_are_independent_and_reset():
    limiter = RateLimiter(limit=1, window_seconds=60, clock=ManualClock())
    limiter.check("a")
    limiter.check("b")
    with pytest.raises(RateLimitError):
        limiter.check("a")
    limiter.reset("a")
    limiter.check("a")


def test_idle_keys_are_swept():
    clock = ManualClock()
    limiter = RateLimiter(limit=5, window_seconds=60, clock=clock)
    limiter.check("a")
    limiter.check("b")
    assert len(limiter) == 2

    clock.advance(61)
    limiter.check("c")

    assert len(limiter) == 1
