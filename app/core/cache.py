"""In-memory TTL cache in front of the open-data portal.

An entry is visible only while ``now < stored_at + ttl``. Expired entries are
reported as misses on lookup even when the periodic sweep has not purged them
yet, so correctness never depends on the sweep running.
"""

import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

# Default TTL in seconds
DEFAULT_TTL = 600

# How often the background sweep purges expired entries
SWEEP_INTERVAL = 120

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheStats:
    keys: int
    hits: int
    misses: int


class CacheStore:
    """Thread-safe key/value store with per-entry TTL and hit/miss counters."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (expires_at, value)
        self._entries: dict[str, tuple[float, Any]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        """Return the cached value if present and not expired, else None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._clock() >= entry[0]:
                self._misses += 1
                return None
            self._hits += 1
            return entry[1]

    def set(self, key: str, value: Any, ttl: float = DEFAULT_TTL) -> None:
        """Store a value, replacing any previous entry and restarting its TTL."""
        with self._lock:
            self._entries[key] = (self._clock() + ttl, value)

    def keys(self) -> list[str]:
        """Keys of entries that are still live."""
        with self._lock:
            now = self._clock()
            return [k for k, (expires_at, _) in self._entries.items() if now < expires_at]

    def clear_all(self) -> int:
        """Drop every entry and return how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
            return removed

    def purge_expired(self) -> int:
        """Physically remove expired entries; returns the number purged."""
        with self._lock:
            now = self._clock()
            expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
            for k in expired:
                del self._entries[k]
            return len(expired)

    def stats(self) -> CacheStats:
        return CacheStats(keys=len(self.keys()), hits=self._hits, misses=self._misses)

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[Any]],
        ttl: float = DEFAULT_TTL,
    ) -> tuple[Any, bool]:
        """Read-through lookup.

        Returns ``(value, cached)``. On a miss ``compute`` is awaited and its
        result stored; if it raises, nothing is stored and the error propagates.
        Concurrent misses on the same key may each compute; the last write wins.
        """
        value = self.get(key)
        if value is not None:
            return value, True
        value = await compute()
        self.set(key, value, ttl)
        return value, False


@lru_cache
def get_cache_store() -> CacheStore:
    """Process-wide cache instance."""
    return CacheStore()
