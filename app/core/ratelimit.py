"""Fixed-window request counter keyed by client address.

Each client gets a window that opens on its first request. Every request in
the window increments the counter; requests beyond ``max_requests`` are
rejected until the window's age reaches ``window_seconds``, at which point the
next request opens a fresh window. Rejections never shorten a window.
"""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

WINDOW_SECONDS = 15 * 60
MAX_REQUESTS = 500
RETRY_AFTER_SECONDS = 900


@dataclass
class _Window:
    count: int
    started_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    count: int
    remaining: int
    reset_after: int  # seconds until the current window closes


class FixedWindowRateLimiter:
    """Small in-process rate limiter.

    Note: state is per-process. Several workers each enforce their own window.
    """

    def __init__(
        self,
        window_seconds: float = WINDOW_SECONDS,
        max_requests: int = MAX_REQUESTS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, _Window] = {}

    def hit(self, client: str) -> RateLimitDecision:
        """Count one request from ``client`` and decide whether to admit it."""
        with self._lock:
            now = self._clock()
            window = self._windows.get(client)
            if window is None or now - window.started_at >= self.window_seconds:
                window = _Window(count=1, started_at=now)
                self._windows[client] = window
            else:
                window.count += 1

            reset_after = self.window_seconds - (now - window.started_at)
            return RateLimitDecision(
                allowed=window.count <= self.max_requests,
                limit=self.max_requests,
                count=window.count,
                remaining=max(0, self.max_requests - window.count),
                reset_after=max(0, math.ceil(reset_after)),
            )

    def prune(self) -> int:
        """Forget windows that have already closed."""
        with self._lock:
            now = self._clock()
            stale = [
                c for c, w in self._windows.items()
                if now - w.started_at >= self.window_seconds
            ]
            for c in stale:
                del self._windows[c]
            return len(stale)

    def __len__(self) -> int:
        return len(self._windows)


@lru_cache
def get_rate_limiter() -> FixedWindowRateLimiter:
    """Process-wide limiter instance."""
    return FixedWindowRateLimiter()
