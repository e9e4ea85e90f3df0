"""confd client - authenticated JSON RPC sessions with a confd daemon.

Provides:
- Connection: lazily connected session with serialized round trips
- Automatic recovery of error details after ambiguous failures
- Redacted protocol logging
- Pluggable transports (HTTP, mock for testing)
"""

__version__ = "0.1.0"

from .config import ConnectionConfig
from .connection import (
    Connection,
    new_anonymous_conn,
    new_conn,
    new_system_conn,
    new_user_conn,
)
from .errors import (
    AmbiguousResponseError,
    CodecError,
    ConfdError,
    ConfigurationError,
    DecodeError,
    EmptyResponseError,
    EncodeError,
    RemoteError,
    ReturnCodeError,
    TransportError,
)
from .options import Options
from .protocol import ErrorEntry, Request, Response
from .transport import (
    BaseTransport,
    HTTPTransport,
    MockTransport,
    Transport,
    TransportState,
    create_http_transport,
    create_mock_transport,
)

__all__ = [
    # Connection
    "Connection",
    "new_conn",
    "new_anonymous_conn",
    "new_system_conn",
    "new_user_conn",
    "ConnectionConfig",
    "Options",
    # Protocol
    "Request",
    "Response",
    "ErrorEntry",
    # Transports
    "Transport",
    "BaseTransport",
    "TransportState",
    "HTTPTransport",
    "MockTransport",
    "create_http_transport",
    "create_mock_transport",
    # Errors
    "ConfdError",
    "ConfigurationError",
    "TransportError",
    "CodecError",
    "EncodeError",
    "DecodeError",
    "AmbiguousResponseError",
    "EmptyResponseError",
    "ReturnCodeError",
    "RemoteError",
]
