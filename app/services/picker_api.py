"""Client for the picker's same-origin ``/api/giphy`` proxy route."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..models import Category, ResultSet, parse_result_set
from ..utils import normalize_query
from .exceptions import TransportFailure

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Return an HTTP client pointed at the configured proxy origin."""

    return httpx.AsyncClient(
        base_url=str(settings.picker_api_url),
        timeout=httpx.Timeout(10.0, connect=5.0),
    )


class PickerApiClient:
    """Fetch trending and search results through the proxy route."""

    _PROXY_PATH = "/api/giphy"

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._client = http_client

    async def fetch(self, category: Category, query: str, limit: int) -> ResultSet:
        normalized = normalize_query(query)
        params: dict[str, Any] = {"type": category, "limit": str(limit)}
        if normalized:
            params["q"] = query

        try:
            response = await self._client.get(self._PROXY_PATH, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportFailure(
                category, normalized, f"HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportFailure(category, normalized, str(exc)) from exc

        try:
            payload = response.json()
        except ValueError:
            logger.debug("Proxy returned a non-JSON body for %s %r", category, normalized)
            return ()
        return parse_result_set(payload)
