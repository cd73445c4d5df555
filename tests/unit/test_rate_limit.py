import pytest

from app.services.rate_limit import FixedWindowRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_allows_up_to_the_limit_then_blocks():
    limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())

    results = [limiter.hit("ip-1") for _ in range(4)]

    assert [r.allowed for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]


def test_keys_are_counted_separately():
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert limiter.hit("a").allowed
    assert limiter.hit("b").allowed
    assert not limiter.hit("a").allowed


def test_window_expiry_resets_the_count():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
    limiter.hit("ip")
    assert not limiter.hit("ip").allowed

    clock.now += 60

    assert limiter.hit("ip").allowed


def test_expired_windows_are_evicted():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(max_requests=5, window_seconds=10, clock=clock)
    limiter.hit("a")
    limiter.hit("b")
    assert len(limiter) == 2

    clock.now += 11
    limiter.hit("c")

    assert len(limiter) == 1


def test_reset_clears_all_windows():
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    limiter.hit("ip")
    limiter.reset()
    assert limiter.hit("ip").allowed


@pytest.mark.parametrize("max_requests,window", [(0, 60), (5, 0), (-1, 10)])
def test_rejects_non_positive_configuration(max_requests, window):
    with pytest.raises(ValueError):
        FixedWindowRateLimiter(max_requests=max_requests, window_seconds=window)
