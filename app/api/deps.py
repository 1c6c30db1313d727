"""FastAPI dependencies for the shared cache and upstream client."""

from typing import Annotated

from fastapi import Depends, Request

from app.core.cache import CacheStore, get_cache_store
from app.services.open_data import OpenDataClient, get_open_data_client


def resolve(request: Request, provider):
    """Call ``provider`` honouring ``app.dependency_overrides``.

    For middleware, which runs outside dependency injection but must see
    the same instances as the routes (and the same test overrides).
    """
    overrides = getattr(request.app, "dependency_overrides", {})
    return overrides.get(provider, provider)()


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


# Typed shorthand for use in route signatures
Cache = Annotated[CacheStore, Depends(get_cache_store)]
Upstream = Annotated[OpenDataClient, Depends(get_open_data_client)]
