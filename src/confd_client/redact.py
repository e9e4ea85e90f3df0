"""Secret redaction for log lines and endpoint renderings.

Redaction works on rendered text, not on structured objects: only the
compact JSON shape ``password":"<secret>"`` is recognised in log lines.
Endpoint renderings mask the userinfo password, or the literal password
substring when the password is not part of the URL.
"""

from __future__ import annotations

import logging
import re

MASK = "********"

_PASSWORD_PATTERN = re.compile(r'password":"(?:[^"\\]|\\.)+"')
_PASSWORD_REPLACEMENT = f'password":"{MASK}"'


def redact(text: str) -> str:
    """Mask every ``password":"..."`` value in ``text``."""
    return _PASSWORD_PATTERN.sub(_PASSWORD_REPLACEMENT, text)


def safe_url(url: str, password: str) -> str:
    """Render ``url`` with the first occurrence of ``password`` masked."""
    if password:
        return url.replace(password, MASK, 1)
    return url


class RedactingLogger:
    """Optional log sink that never emits a password.

    Wraps a caller supplied ``logging.Logger``. Without one, lines go to
    this module's logger at DEBUG level and are only formatted when that
    level is enabled.
    """

    def __init__(self, sink: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.sink = sink
        self.level = level
        self._debug = logging.getLogger(__name__)

    def log(self, message: str, *args: object) -> None:
        """Format ``message % args``, redact it and emit it."""
        if self.sink is None and not self._debug.isEnabledFor(logging.DEBUG):
            return
        line = redact(message % args if args else message)
        if self.sink is not None:
            self.sink.log(self.level, line)
        else:
            self._debug.debug(line)
