"""Error recovery for ambiguous daemon answers.

confd answers some failed calls with an empty result or a bare failure
return code. The actual reason is kept in the session's error list, which
is fetched with a diagnostic ``get_error_list`` call:

1. the diagnostic call fails: its error replaces the original one
2. it returns entries: the first entry's message becomes the error
3. it returns no entries: the original error stands

The original call is never repeated.
"""

from __future__ import annotations

import logging

from .errors import AmbiguousResponseError, ConfdError, RemoteError
from .protocol import ErrorEntry
from .redact import redact
from .serializer import RequestSerializer

logger = logging.getLogger(__name__)

ERROR_LIST_METHOD = "get_error_list"


class ErrorRecoveryPolicy:
    """Upgrades ambiguous errors into specific ones."""

    def __init__(self, serializer: RequestSerializer) -> None:
        self._serializer = serializer

    async def fetch_errors(self) -> list[ErrorEntry]:
        """Fetch the daemon's error list for the current session."""
        return await self._serializer.call(
            ERROR_LIST_METHOD,
            result_type=list[ErrorEntry],
            check_return_code=False,
        )

    async def recover(self, error: Exception) -> Exception:
        """Return the error that should be raised in place of ``error``."""
        if not isinstance(error, AmbiguousResponseError):
            return error

        try:
            entries = await self.fetch_errors()
        except ConfdError as diagnostic_error:
            logger.debug(
                redact(f"Error list unavailable after {type(error).__name__}: {diagnostic_error}")
            )
            return diagnostic_error

        if entries:
            return RemoteError(entries[0].render(), entries=entries)
        return error
