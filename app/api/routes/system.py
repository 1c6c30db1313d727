"""Service banner and health endpoints."""

import time

import psutil
from fastapi import APIRouter
from pydantic import BaseModel

from app.api.deps import Cache
from app.models.base import iso_timestamp

router = APIRouter(tags=["system"])

SERVICE_NAME = "V.I.G.I.A. Recife - Proxy Server"
COUNCILLOR = "Rinaldo Júnior"

ENDPOINTS = {
    "receitas": "/api/receitas",
    "despesas": "/api/despesas",
    "health": "/health",
}

_start_time = time.monotonic()


def uptime_seconds() -> float:
    return round(time.monotonic() - _start_time, 3)


class BannerResponse(BaseModel):
    service: str
    status: str
    vereador: str
    timestamp: str
    uptime: float
    endpoints: dict[str, str]


class MemoryUsage(BaseModel):
    rss: int
    vms: int


class CacheStatsOut(BaseModel):
    keys: int
    hits: int
    misses: int


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    memory: MemoryUsage
    uptime: float
    cache_stats: CacheStatsOut


@router.get("/", response_model=BannerResponse)
async def banner() -> BannerResponse:
    return BannerResponse(
        service=SERVICE_NAME,
        status="Online",
        vereador=COUNCILLOR,
        timestamp=iso_timestamp(),
        uptime=uptime_seconds(),
        endpoints=ENDPOINTS,
    )


@router.get("/health", response_model=HealthResponse)
async def health(cache: Cache) -> HealthResponse:
    """Process memory, uptime and cache counters."""
    mem = psutil.Process().memory_info()
    stats = cache.stats()
    return HealthResponse(
        status="OK",
        timestamp=iso_timestamp(),
        memory=MemoryUsage(rss=mem.rss, vms=mem.vms),
        uptime=uptime_seconds(),
        cache_stats=CacheStatsOut(keys=stats.keys, hits=stats.hits, misses=stats.misses),
    )
