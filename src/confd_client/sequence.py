"""Per-connection correlation id generator."""

from __future__ import annotations

import threading


class CorrelationIdGenerator:
    """Strictly increasing ids starting at 0, never reused.

    Guarded by its own lock, independent of the session and request locks.
    The lock is never held across an await.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def next(self) -> int:
        """Return the current value, then increment."""
        with self._lock:
            value = self._value
            self._value += 1
            return value

    def peek(self) -> int:
        """Value the next call to next() will return."""
        with self._lock:
            return self._value
