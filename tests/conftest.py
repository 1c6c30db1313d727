"""Shared test fixtures — fresh cache/limiter per test, fake clock, mocked upstream."""

from collections.abc import AsyncGenerator, Iterator
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.core.cache import CacheStore, get_cache_store
from app.core.ratelimit import FixedWindowRateLimiter, get_rate_limiter
from app.main import app

UPSTREAM_URL = "http://dados.recife.pe.gov.br/api/3/action/datastore_search"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def upstream_response(
    status_code: int = 200,
    *,
    total: int = 2,
    records: list[dict] | None = None,
    json: object = None,
) -> httpx.Response:
    """Build a datastore_search response as the portal would send it."""
    if json is None:
        json = {
            "success": True,
            "result": {
                "total": total,
                "records": records if records is not None else [
                    {"_id": 1, "orgao": "SEDUC", "valor": 10.5},
                    {"_id": 2, "orgao": "SESAU", "valor": 7.25},
                ],
            },
        }
    return httpx.Response(
        status_code, json=json, request=httpx.Request("GET", UPSTREAM_URL)
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> CacheStore:
    return CacheStore(clock=clock)


@pytest.fixture
def limiter(clock) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(clock=clock)


@pytest.fixture
def http_mock() -> Iterator[AsyncMock]:
    """Replace the upstream httpx client; ``http_mock.get`` answers each call."""
    mock_http_client = AsyncMock()
    mock_http_client.get = AsyncMock(return_value=upstream_response())
    mock_http_client.__aenter__ = AsyncMock(return_value=mock_http_client)
    mock_http_client.__aexit__ = AsyncMock(return_value=None)

    with patch("app.services.open_data.httpx.AsyncClient", return_value=mock_http_client):
        yield mock_http_client


@pytest.fixture
async def client(cache, limiter) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async test client with cache and rate limiter overrides."""
    app.dependency_overrides[get_cache_store] = lambda: cache
    app.dependency_overrides[get_rate_limiter] = lambda: limiter

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_response():
    """Factory for upstream responses (see ``upstream_response``)."""
    return upstream_response
