"""Search backend clients.

Provides:
- AbstractSearchClient: interface the session depends on
- HttpSearchClient: httpx adapter for the POST /search contract
- SearchBackendError: any failed fetch, with the backend's detail text"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from .config import Settings, get_settings
from .models import SearchQuery, SearchResponse


class SearchBackendError(Exception):
    """Fetch failed; `detail` is for logs only, never for end users."""

    def __init__(self, detail: str, status_code: Optional[int] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class AbstractSearchClient:
    """Interface for search backends."""
    async def search(self, query: SearchQuery) -> SearchResponse:
        # Fetch one page window for the query
        raise NotImplementedError

    async def aclose(self) -> None:
        return None


class HttpSearchClient(AbstractSearchClient):
    """Async adapter for the car search HTTP API."""

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self._settings.request_timeout_seconds
        )

    @property
    def endpoint(self) -> str:
        return f"{self._settings.api_url.rstrip('/')}/search"

    async def search(self, query: SearchQuery) -> SearchResponse:
        try:
            response = await self._client.post(self.endpoint, json=query.to_payload())
        except httpx.HTTPError as exc:
            raise SearchBackendError(f"Search request failed: {exc}") from exc

        if response.is_error:
            raise SearchBackendError(_error_detail(response), response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchBackendError("Search response is not valid JSON", response.status_code) from exc
        if not isinstance(payload, dict):
            raise SearchBackendError("Search response is not a JSON object", response.status_code)
        return SearchResponse.from_payload(payload)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _error_detail(response: httpx.Response) -> str:
    """Pull the backend's `detail` field out of an error body, if any."""
    fallback = f"Failed to search cars (HTTP {response.status_code})"
    try:
        body: Any = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return fallback
