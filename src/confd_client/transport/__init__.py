"""Transports for confd connections.

- HTTPTransport: JSON over HTTP to the daemon (default)
- MockTransport: In-memory, for testing without real I/O
"""

from ..config import DEFAULT_TIMEOUT
from .base import BaseTransport, Transport, TransportState
from .http import HTTPTransport
from .mock import MockTransport


def create_http_transport(timeout: float = DEFAULT_TIMEOUT) -> HTTPTransport:
    """Create an HTTP transport.

    Args:
        timeout: Timeout in seconds for every network operation

    Returns:
        HTTPTransport ready to be connected
    """
    return HTTPTransport(timeout=timeout)


def create_mock_transport(delay: float = 0.0) -> MockTransport:
    """Create a mock transport for testing.

    Args:
        delay: Seconds each round trip sleeps, to let concurrent callers interleave

    Returns:
        MockTransport with default replies for the session calls
    """
    return MockTransport(delay=delay)


__all__ = [
    "Transport",
    "BaseTransport",
    "TransportState",
    "HTTPTransport",
    "MockTransport",
    "create_http_transport",
    "create_mock_transport",
]
