"""Periodic job — purge expired cache entries and closed rate-limit windows."""

from __future__ import annotations

import asyncio
import logging

from app.core.cache import SWEEP_INTERVAL, CacheStore
from app.core.ratelimit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


def sweep_once(cache: CacheStore, limiter: FixedWindowRateLimiter) -> dict:
    """Run one purge pass over both stores."""
    purged = cache.purge_expired()
    pruned = limiter.prune()
    logger.debug("Sweep: purged %d cache entries, pruned %d rate windows", purged, pruned)
    return {"purged": purged, "pruned": pruned}


async def run_sweeper(
    cache: CacheStore,
    limiter: FixedWindowRateLimiter,
    interval: float = SWEEP_INTERVAL,
) -> None:
    """Sweep forever every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            sweep_once(cache, limiter)
        except Exception:
            logger.exception("Cache sweep failed")
