"""Tests for the periodic cache / rate-window sweep."""

import asyncio

import pytest

from app.workers.sweeper import run_sweeper, sweep_once


def test_sweep_once_purges_expired(cache, limiter, clock):
    cache.set("old", 1, ttl=10)
    cache.set("fresh", 2, ttl=1_000)
    limiter.hit("10.0.0.1")
    clock.advance(limiter.window_seconds)

    result = sweep_once(cache, limiter)

    assert result == {"purged": 1, "pruned": 1}
    assert cache.keys() == ["fresh"]
    assert len(limiter) == 0


@pytest.mark.asyncio
async def test_run_sweeper_until_cancelled(cache, limiter, clock):
    cache.set("old", 1, ttl=10)
    clock.advance(10)

    task = asyncio.create_task(run_sweeper(cache, limiter, interval=0))
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert cache.clear_all() == 0
