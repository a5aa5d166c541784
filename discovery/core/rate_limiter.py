"""Sliding-window limiter for outbound generation calls.

One instance guards every call made by a process. State lives in memory only,
so several server instances each enforce their own cap.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable, Deque

from discovery.errors import RateLimitExceeded


DEFAULT_MAX_REQUESTS = 10
DEFAULT_WINDOW_SECONDS = 60.0


class RateLimiter:
    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._timestamps: Deque[float] = deque()
        self._lock = threading.Lock()

    def _evict(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] >= self.window_seconds:
            self._timestamps.popleft()

    def try_acquire(self) -> None:
        """Record one call, or raise RateLimitExceeded when the window is full."""
        with self._lock:
            now = self._clock()
            self._evict(now)
            if len(self._timestamps) >= self.max_requests:
                retry_after = self.window_seconds - (now - self._timestamps[0])
                raise RateLimitExceeded(
                    f"Rate limit of {self.max_requests} requests per "
                    f"{self.window_seconds:g} seconds exceeded; retry in {retry_after:.0f} seconds"
                )
            self._timestamps.append(now)

    def remaining(self) -> int:
        with self._lock:
            self._evict(self._clock())
            return self.max_requests - len(self._timestamps)

    def reset(self) -> None:
        with self._lock:
            self._timestamps.clear()
