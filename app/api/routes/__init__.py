"""API router aggregation."""

from fastapi import APIRouter

from app.api.routes.cache import router as cache_router
from app.api.routes.datasets import router as datasets_router
from app.api.routes.system import router as system_router

api_router = APIRouter(prefix="/api")
api_router.include_router(datasets_router)
api_router.include_router(cache_router)

__all__ = ["api_router", "system_router"]
