"""FastAPI application entrypoint."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.middleware import (
    ErrorBoundaryMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
)
from app.api.routes import api_router, system_router
from app.api.routes.system import ENDPOINTS, SERVICE_NAME
from app.core.cache import get_cache_store
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.core.ratelimit import get_rate_limiter
from app.models.base import iso_timestamp
from app.workers.sweeper import run_sweeper

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = ["/api/receitas", "/api/despesas", "/health"]


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    configure_logging(settings.log_level)
    cache = get_cache_store()

    logger.info("%s listening on port %d", SERVICE_NAME, settings.port)
    for name, path in ENDPOINTS.items():
        logger.info("  endpoint %s -> %s", name, path)

    sweeper = asyncio.create_task(run_sweeper(cache, get_rate_limiter()))
    yield
    # Shutdown: stop the sweep and drop the cache
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    flushed = cache.clear_all()
    logger.info("Shutting down; flushed %d cache keys", flushed)


app = FastAPI(
    title="VIGIA Recife Proxy",
    version="1.0.0",
    description="Caching proxy for the Recife open-data revenue and expense datasets",
    lifespan=lifespan,
)

# ── Middleware (last added runs first) ───────────────────────
_settings = get_settings()
app.add_middleware(ErrorBoundaryMiddleware)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _settings.allowed_origins.split(",") if o.strip()],
    allow_origin_regex=_settings.allowed_origin_regex or None,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(GZipMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# ── Routes ───────────────────────────────────────────────────
app.include_router(system_router)
app.include_router(api_router)


# ── Error handlers ───────────────────────────────────────────

@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unknown path or unsupported method on a known path
    if exc.status_code not in (404, 405):
        return await http_exception_handler(request, exc)
    return JSONResponse(
        status_code=404,
        content={
            "error": "Endpoint não encontrado",
            "available_endpoints": AVAILABLE_ENDPOINTS,
            "timestamp": iso_timestamp(),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=_settings.host,
        port=_settings.port,
        log_level=_settings.log_level.lower(),
    )
