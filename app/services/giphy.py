"""Client for the upstream Giphy trending and search endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..models import Category, ResultSet, normalize_category, parse_result_set
from ..utils import normalize_query
from .exceptions import TransportFailure

logger = logging.getLogger(__name__)


class GiphyClient:
    """Thin wrapper around the Giphy HTTP API.

    The client owns the API key, so it only ever runs server side: the proxy
    route forwards raw payloads through :meth:`fetch_payload`, and
    :meth:`fetch` lets a picker session talk to Giphy directly.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        if not settings.giphy_api_key:
            raise ValueError("Giphy API key is required when initialising GiphyClient")
        self._settings = settings
        self._client = http_client
        self._base_url = str(settings.giphy_api_url).rstrip("/")

    def build_request(
        self, category: str, query: str | None, limit: int
    ) -> tuple[str, dict[str, Any]]:
        """Return the endpoint URL and query parameters for a lookup."""

        endpoint = normalize_category(category)
        normalized = normalize_query(query)
        params: dict[str, Any] = {
            "api_key": self._settings.giphy_api_key,
            "limit": limit,
            "rating": self._settings.giphy_rating,
        }
        if normalized:
            params["q"] = query
            return f"{self._base_url}/{endpoint}/search", params
        return f"{self._base_url}/{endpoint}/trending", params

    async def fetch_payload(
        self, category: str, query: str | None, limit: int
    ) -> dict[str, Any]:
        """Return the raw provider payload for a trending or search lookup."""

        url, params = self.build_request(category, query, limit)
        normalized = normalize_query(query)
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise TransportFailure(category, normalized, str(exc)) from exc
        if response.status_code >= 400:
            logger.warning(
                "Giphy %s lookup for %r failed: %s",
                category,
                normalized,
                response.status_code,
            )
            raise TransportFailure(
                category, normalized, f"HTTP {response.status_code}"
            )
        try:
            payload = response.json()
        except ValueError:
            logger.debug("Giphy returned a non-JSON body for %r", normalized)
            return {}
        if not isinstance(payload, dict):
            return {}
        return payload

    async def fetch(self, category: Category, query: str, limit: int) -> ResultSet:
        payload = await self.fetch_payload(category, query, limit)
        return parse_result_set(payload)
