"""Pytest configuration and shared fixtures."""

import pytest

from confd_client import Connection, MockTransport
from confd_client.config import ANONYMOUS_LOCAL_URL


@pytest.fixture
def transport() -> MockTransport:
    """Mock transport with default session replies."""
    return MockTransport()


@pytest.fixture
def conn(transport: MockTransport) -> Connection:
    """Disconnected connection over the mock transport."""
    return Connection(ANONYMOUS_LOCAL_URL, transport=transport)
