"""Transport abstraction for confd connections.

A transport carries exactly one request body to the daemon and returns
exactly one response body. It knows nothing about envelopes, sessions or
correlation ids; those live in the connection layer.

Architecture:
- Transport is the PROTOCOL every implementation satisfies
- BaseTransport provides the state machine and error wrapping
- Implementations only fill in _do_connect/_do_round_trip/_do_close
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Protocol, runtime_checkable

import httpx

from ..errors import TransportError

logger = logging.getLogger(__name__)


class TransportState(str, Enum):
    """Connection state machine."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


@runtime_checkable
class Transport(Protocol):
    """Protocol for confd transports.

    All transports must implement:
    - connect/close: Lifecycle management (close is safe when never connected)
    - is_connected: Cheap, non-blocking liveness check
    - round_trip: Send one body and block for exactly one response body,
      without any implicit retry
    """

    @property
    def is_connected(self) -> bool:
        """Check if the channel is open."""
        ...

    async def connect(self, url: httpx.URL) -> None:
        """Open the channel to ``url``.

        Raises:
            TransportError: If the channel cannot be opened
        """
        ...

    async def round_trip(self, body: bytes) -> bytes:
        """Send a request body and return the response body.

        Raises:
            TransportError: If sending or receiving fails
        """
        ...

    async def close(self) -> None:
        """Release the channel."""
        ...


class BaseTransport(ABC):
    """Base class for transports with common functionality.

    Provides:
    - State management
    - Wrapping of implementation errors into TransportError
    """

    def __init__(self) -> None:
        self._state = TransportState.DISCONNECTED
        self._url: httpx.URL | None = None

    @property
    def state(self) -> TransportState:
        """Current connection state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """Check if transport is connected."""
        return self._state == TransportState.CONNECTED

    async def connect(self, url: httpx.URL) -> None:
        """Establish the channel."""
        if self._state == TransportState.CONNECTED:
            return

        self._state = TransportState.CONNECTING
        try:
            await self._do_connect(url)
        except TransportError:
            self._state = TransportState.DISCONNECTED
            raise
        except Exception as e:
            self._state = TransportState.DISCONNECTED
            raise TransportError(f"Failed to connect: {e}") from e

        self._url = url
        self._state = TransportState.CONNECTED
        logger.debug(f"{self.__class__.__name__} connected to {url.host}:{url.port}")

    async def round_trip(self, body: bytes) -> bytes:
        """Send one request body and return its response body."""
        if not self.is_connected:
            raise TransportError("Transport not connected")

        try:
            return await self._do_round_trip(body)
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(f"Round trip failed: {e}") from e

    async def close(self) -> None:
        """Release the channel. The transport is disconnected afterwards even on error."""
        if self._state == TransportState.DISCONNECTED:
            return

        try:
            await self._do_close()
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(f"Failed to close: {e}") from e
        finally:
            self._state = TransportState.DISCONNECTED
            self._url = None
        logger.debug(f"{self.__class__.__name__} closed")

    # Abstract methods for subclasses
    @abstractmethod
    async def _do_connect(self, url: httpx.URL) -> None:
        """Implementation-specific connection logic."""
        ...

    @abstractmethod
    async def _do_round_trip(self, body: bytes) -> bytes:
        """Implementation-specific send/receive logic."""
        ...

    @abstractmethod
    async def _do_close(self) -> None:
        """Implementation-specific close logic."""
        ...
