# ==============================================================================
# HTTP CLIENT POOL - Shared httpx.AsyncClient
# ==============================================================================
# Lazily created, reused across requests, closed on shutdown
# ==============================================================================

from __future__ import annotations

import asyncio
from typing import Dict, Optional

import httpx


class HTTPClientPool:
    """
    Managed HTTP client with connection reuse.

    The underlying ``httpx.AsyncClient`` is created on first use so that
    clients can be built at import time, before an event loop exists.
    A custom ``transport`` (e.g. ``httpx.MockTransport``) may be supplied.
    """

    def __init__(
        self,
        base_url: str = "",
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.headers = headers or {}
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def get_client(self) -> httpx.AsyncClient:
        """
        Get or create HTTP client (lazy initialization).

        Uses double-checked locking pattern for efficiency.
        """
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is not None:
                return self._client

            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                transport=self._transport,
            )
            return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
