# app/services/rate_limit.py
"""Fixed-window request counters keyed by client.

The limiter is an injected collaborator (see ``app.api.deps``); a
multi-instance deployment can swap in a shared implementation with the same
``hit`` signature.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int


@dataclass
class _Window:
    started_at: float
    count: int


class FixedWindowRateLimiter:
    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        if max_requests <= 0 or window_seconds <= 0:
            raise ValueError("max_requests and window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitResult:
        now = self._clock()
        with self._lock:
            self._evict_expired(now)
            window = self._windows.get(key)
            if window is None:
                self._windows[key] = _Window(started_at=now, count=1)
                return RateLimitResult(allowed=True, remaining=self.max_requests - 1)
            if window.count >= self.max_requests:
                return RateLimitResult(allowed=False, remaining=0)
            window.count += 1
            return RateLimitResult(allowed=True, remaining=self.max_requests - window.count)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def __len__(self) -> int:
        return len(self._windows)

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now - window.started_at >= self.window_seconds]
        for key in expired:
            del self._windows[key]
