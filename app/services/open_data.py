"""Client for the municipal CKAN open-data portal (datastore_search)."""

from functools import lru_cache

import httpx
from pydantic import ValidationError

from app.core.config import get_settings
from app.models.dataset import DatasetPage

SEARCH_PATH = "/api/3/action/datastore_search"
USER_AGENT = "VIGIA-Recife-Proxy/1.0"
UPSTREAM_TIMEOUT = 10.0


class UpstreamError(Exception):
    """Base class for failures talking to the open-data portal."""


class UpstreamHttpError(UpstreamError):
    """The portal answered with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"API response: {status_code}")
        self.status_code = status_code


class UpstreamTransportError(UpstreamError):
    """Network failure or timeout before a response arrived."""


class UpstreamProtocolError(UpstreamError):
    """The response body is not a successful datastore_search envelope."""


class OpenDataClient:
    """Single-attempt fetcher for one page of a datastore resource."""

    def __init__(self, base_url: str, timeout: float = UPSTREAM_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def fetch(self, resource_id: str, limit: str | int, offset: str | int) -> DatasetPage:
        """Fetch ``limit`` records of ``resource_id`` starting at ``offset``.

        Raises an ``UpstreamError`` subclass on any failure. No retries.
        """
        params = {"resource_id": resource_id, "limit": str(limit), "offset": str(offset)}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(
                    f"{self.base_url}{SEARCH_PATH}",
                    params=params,
                    headers={"User-Agent": USER_AGENT},
                )
        except httpx.TimeoutException as exc:
            raise UpstreamTransportError(f"timeout after {self.timeout:g}s") from exc
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            raise UpstreamHttpError(resp.status_code)

        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamProtocolError("invalid JSON body") from exc

        if not isinstance(payload, dict) or not payload.get("success"):
            raise UpstreamProtocolError("API retornou erro")

        try:
            return DatasetPage.model_validate(payload.get("result"))
        except ValidationError as exc:
            raise UpstreamProtocolError("malformed result envelope") from exc


@lru_cache
def get_open_data_client() -> OpenDataClient:
    return OpenDataClient(get_settings().upstream_base_url)
