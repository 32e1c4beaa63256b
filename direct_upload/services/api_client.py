"""HTTP adapter for the origin server and the storage endpoint."""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


class HTTPAPIClient:
    """
    HTTP client adapter for upload calls.

    Implements IAPIClient protocol. Responses are returned as-is; status
    handling belongs to the calling service. No retries are performed.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        kwargs: Dict[str, Any] = {"base_url": self._base_url}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        self._client = httpx.AsyncClient(**kwargs)
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("HTTPAPIClient not initialized. Use 'async with' context.")
        return self._client

    async def post(
        self,
        endpoint: str,
        json: Dict,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self._require_client().post(endpoint, json=json, headers=headers)

    async def put(
        self,
        url: str,
        content: bytes,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        # Absolute URL: httpx ignores base_url here
        return await self._require_client().put(url, content=content, headers=headers)
