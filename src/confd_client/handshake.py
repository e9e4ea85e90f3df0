"""Session handshake.

Two calls establish a session:

1. ``new`` with the connection options as the only parameter
2. ``get_SID`` when no session id is known yet

The caller must hold the session lock.
"""

from __future__ import annotations

import contextlib

import httpx

from .errors import TransportError
from .options import Options
from .redact import RedactingLogger
from .serializer import RequestSerializer
from .transport import Transport

NEW_SESSION_METHOD = "new"
GET_SID_METHOD = "get_SID"


class SessionEstablisher:
    """Opens the transport and obtains a session id.

    Any failure, cancellation included, aborts the handshake. It is logged,
    the transport is closed (best effort) so the connection is left
    disconnected, and the error is raised to the caller.
    """

    def __init__(
        self,
        transport: Transport,
        serializer: RequestSerializer,
        options: Options,
        log: RedactingLogger,
    ) -> None:
        self._transport = transport
        self._serializer = serializer
        self._options = options
        self._log = log

    async def establish(self, url: httpx.URL, display_url: str) -> None:
        """Connect to ``url`` and run the handshake calls."""
        self._log.log("Connect to %s", display_url)
        try:
            await self._transport.connect(url)
        except BaseException as e:
            self._log.log("Unable to connect %s", e)
            await self._abort()
            raise

        try:
            await self._serializer.call(NEW_SESSION_METHOD, [self._options])
            if self._options.sid is None:
                # get_SID answers are not return codes
                sid = await self._serializer.call(GET_SID_METHOD, check_return_code=False)
                self._options.assign_sid(sid)
        except BaseException as e:
            self._log.log("Unable to create session %s", e)
            await self._abort()
            raise

    async def _abort(self) -> None:
        with contextlib.suppress(TransportError):
            await self._transport.close()
