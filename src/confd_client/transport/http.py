"""HTTP transport.

confd speaks JSON over HTTP on port 4472. Each round trip is one POST of
the request body to the endpoint; the response body is returned as is.
Credentials are never sent in the URL, they travel in the ``new`` call.
"""

from __future__ import annotations

import httpx

from ..config import DEFAULT_TIMEOUT
from ..errors import TransportError
from .base import BaseTransport


class HTTPTransport(BaseTransport):
    """Transport over a persistent httpx client.

    The timeout applies to every network operation of a round trip; it is
    the only timeout in the request path.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Timeout in seconds for every network operation
            http_transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        super().__init__()
        self.timeout = timeout
        self._http_transport = http_transport
        self._client: httpx.AsyncClient | None = None
        self._endpoint: httpx.URL | None = None

    async def _do_connect(self, url: httpx.URL) -> None:
        """Create the HTTP client for the endpoint."""
        # netloc carries no user info
        self._endpoint = httpx.URL(
            f"{url.scheme}://{url.netloc.decode('ascii')}{url.raw_path.decode('ascii')}"
        )
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=self._http_transport,
        )

    async def _do_round_trip(self, body: bytes) -> bytes:
        """POST the body and return the response body."""
        if not self._client or self._endpoint is None:
            raise TransportError("HTTP client not connected")

        try:
            response = await self._client.post(self._endpoint, content=body)
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP request failed: {e}") from e

        if response.status_code >= 400:
            raise TransportError(f"confd answered HTTP {response.status_code}")
        return response.content

    async def _do_close(self) -> None:
        """Close the HTTP client."""
        client, self._client = self._client, None
        self._endpoint = None
        if client:
            await client.aclose()
