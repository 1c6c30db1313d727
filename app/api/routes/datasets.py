"""Revenue (receitas) and expense (despesas) endpoints backed by the read-through cache."""

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.api.deps import Cache, Upstream
from app.core.cache import DEFAULT_TTL, CacheStore
from app.core.cache_keys import derive_cache_key
from app.models.base import iso_timestamp
from app.services.open_data import OpenDataClient, UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["datasets"])


@dataclass(frozen=True)
class Dataset:
    """An upstream datastore resource exposed by this proxy."""

    name: str  # cache-key prefix and error label
    resource_id: str


RECEITAS = Dataset(
    name="receitas",
    resource_id="14618877-8c0e-4223-a126-12333f1f614e",
)
DESPESAS = Dataset(
    name="despesas",
    resource_id="5a0e2e5d-125b-4ce2-8aea-940eaf782069",
)


# ── Schemas ──────────────────────────────────────────────────

class DatasetResponse(BaseModel):
    success: bool = True
    cached: bool
    timestamp: str
    total: int
    records: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: str | None = None
    timestamp: str


# ── Shared handler ───────────────────────────────────────────

async def serve_dataset(
    dataset: Dataset,
    cache: CacheStore,
    upstream: OpenDataClient,
    limit: str,
    offset: str,
    filters: list[str | None],
) -> DatasetResponse | JSONResponse:
    """Answer from cache, or fetch one page upstream and cache it."""
    key = derive_cache_key(dataset.name, limit, offset, filters)

    try:
        page, cached = await cache.get_or_compute(
            key,
            lambda: upstream.fetch(dataset.resource_id, limit, offset),
            ttl=DEFAULT_TTL,
        )
    except UpstreamError as exc:
        logger.warning("Erro ao buscar %s: %s", dataset.name, exc)
        body = ErrorResponse(
            error=f"Erro ao buscar dados de {dataset.name}",
            details=str(exc),
            timestamp=iso_timestamp(),
        )
        return JSONResponse(status_code=500, content=body.model_dump())

    return DatasetResponse(
        cached=cached,
        timestamp=iso_timestamp(),
        total=page.total,
        records=page.records,
    )


# ── Routes ───────────────────────────────────────────────────

@router.get(
    "/receitas",
    response_model=DatasetResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_receitas(
    cache: Cache,
    upstream: Upstream,
    limit: str = "100",
    offset: str = "0",
    orgao: str | None = None,
    categoria: str | None = None,
):
    """Municipal revenue records."""
    return await serve_dataset(RECEITAS, cache, upstream, limit, offset, [orgao, categoria])


@router.get(
    "/despesas",
    response_model=DatasetResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_despesas(
    cache: Cache,
    upstream: Upstream,
    limit: str = "100",
    offset: str = "0",
    categoria: str | None = None,
    orgao: str | None = None,
):
    """Municipal expense records."""
    return await serve_dataset(DESPESAS, cache, upstream, limit, offset, [categoria, orgao])
