"""Administrative cache operations."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.deps import Cache
from app.models.base import iso_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cache", tags=["cache"])


class CacheClearResponse(BaseModel):
    success: bool = True
    message: str
    cleared_keys: int
    timestamp: str


# TODO: require an admin token; today this is protected only by network placement.
@router.post("/clear", response_model=CacheClearResponse)
async def clear_cache(cache: Cache) -> CacheClearResponse:
    """Drop every cached dataset page."""
    cleared = cache.clear_all()
    logger.info("Cache cleared: %d keys removed", cleared)
    return CacheClearResponse(
        message="Cache limpo com sucesso",
        cleared_keys=cleared,
        timestamp=iso_timestamp(),
    )
