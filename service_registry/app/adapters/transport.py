"""
Transports that perform the network exchange for a built request.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from shared.logging import get_logger
from ..domain.outcomes import OutboundRequest


@runtime_checkable
class Transport(Protocol):
    """Sends a request and returns the response, raising on I/O failure."""

    async def send(self, request: OutboundRequest) -> Any:
        ...


class HttpxTransport:
    """Async httpx transport for the registry API.

    Responses are returned whatever their status code; only failures to get
    a response at all (connect errors, timeouts, protocol errors) raise.
    """

    def __init__(self, *, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None) -> None:
        self.logger = get_logger("registry.transport")
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def send(self, request: OutboundRequest) -> httpx.Response:
        response = await self._client.request(
            request.method,
            request.url,
            headers=dict(request.headers),
            content=request.body,
        )
        self.logger.debug(
            "Registry responded",
            method=request.method,
            url=request.url,
            status_code=response.status_code
        )
        return response
