"""Request serialization: one in-flight round trip per connection."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Sequence
from typing import Any

from .errors import TransportError
from .protocol import Request, Response
from .redact import RedactingLogger
from .sequence import CorrelationIdGenerator
from .transport import Transport


class RequestSerializer:
    """Runs correlated round trips over a shared transport.

    The id is allocated and the request encoded outside the lock. Sending,
    receiving and decoding happen under the request lock as one step.
    A transport failure closes the transport.
    """

    def __init__(
        self,
        transport: Transport,
        ids: CorrelationIdGenerator,
        log: RedactingLogger,
    ) -> None:
        self._transport = transport
        self._ids = ids
        self._log = log
        self._lock = asyncio.Lock()

    @property
    def lock(self) -> asyncio.Lock:
        """The request lock."""
        return self._lock

    async def call(
        self,
        method: str,
        params: Sequence[Any] = (),
        result_type: Any = Any,
        check_return_code: bool = True,
    ) -> Any:
        """Perform one round trip and return the decoded result.

        Raises:
            EncodeError: If the parameters cannot be encoded
            TransportError: If the round trip fails (the transport is closed)
            DecodeError: If the response is malformed or mis-correlated
            RemoteError: If the daemon returned an explicit error
            EmptyResponseError, ReturnCodeError: On ambiguous answers
        """
        request = Request.build(method, params, self._ids.next())
        self._log.log("=> %s", request)

        async with self._lock:
            try:
                raw = await self._transport.round_trip(request.encode())
            except TransportError:
                with contextlib.suppress(TransportError):
                    await self._transport.close()
                raise

            response = Response.parse(raw, request.id)
            result = response.decode(result_type, check_return_code)

        self._log.log("<= %s", response)
        return result
