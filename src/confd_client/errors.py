"""Exception hierarchy for the confd client.

Every error raised by this package derives from ConfdError:

- TransportError: the channel could not be opened, used or closed
- CodecError: a request could not be encoded or a response decoded
- AmbiguousResponseError: the daemon answered without saying what went wrong
- RemoteError: the daemon reported a specific error
- ConfigurationError: the endpoint or config values are invalid
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .protocol.response import ErrorEntry


class ConfdError(Exception):
    """Base class for all confd client errors."""

    pass


class ConfigurationError(ConfdError):
    """Invalid endpoint URL or configuration value."""

    pass


class TransportError(ConfdError):
    """Connect, round trip or close failed on the underlying channel."""

    pass


class CodecError(ConfdError):
    """Envelope could not be encoded or decoded."""

    pass


class EncodeError(CodecError):
    """Request parameters are not JSON encodable."""

    pass


class DecodeError(CodecError):
    """Response body is malformed, has the wrong id or the wrong shape."""

    pass


class AmbiguousResponseError(ConfdError):
    """The daemon signalled failure without embedding any detail.

    Subclasses are intercepted by the error recovery policy, which asks
    the daemon for its error list to find out what actually went wrong.
    """

    pass


class EmptyResponseError(AmbiguousResponseError):
    """Response carried no result payload."""

    def __init__(self, message: str = "confd returned an empty response") -> None:
        super().__init__(message)


class ReturnCodeError(AmbiguousResponseError):
    """Response carried the failure return code and nothing else."""

    def __init__(self, message: str = "confd returned a failure return code") -> None:
        super().__init__(message)


class RemoteError(ConfdError):
    """A specific error reported by the daemon.

    ``str(error)`` is exactly the rendered message of the first entry,
    the complete list is kept in ``entries``.
    """

    def __init__(
        self,
        message: str,
        entries: list[ErrorEntry] | None = None,
        code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.entries = entries or []
        self.code = code
