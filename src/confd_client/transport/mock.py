"""Mock transport for testing.

No actual I/O - replies are generated in memory from canned results.

Usage:
    transport = MockTransport()
    transport.set_result("get_object", {"name": "Internal"})
    transport.queue("set_object", None)  # one empty response

    conn = Connection("http://127.0.0.1:4472/", transport=transport)
    await conn.request("get_object", "REF_1")

    assert transport.methods == ["new", "get_SID", "get_object"]

A reply can be:
- any JSON value: wrapped into ``{"id": <request id>, "result": value}``
- bytes: returned verbatim as the response body
- an exception instance: raised from round_trip
- a callable taking the decoded request dict: called, its return value
  is then treated like any other reply

remote_error() builds a reply carrying an explicit daemon error.
"""

from __future__ import annotations

import asyncio
import json
from collections import defaultdict, deque
from collections.abc import Callable
from typing import Any

import httpx

from .base import BaseTransport

DEFAULT_RESULTS: dict[str, Any] = {
    "new": 1,
    "get_SID": "sid_mock",
    "detach": 1,
    "get_error_list": [],
}


class MockTransport(BaseTransport):
    """In-memory transport recording every operation.

    ``operations`` lists connect/round_trip/close calls in order, ``trace``
    records ``("enter", id)``/``("exit", id)`` around each round trip so
    tests can check that round trips never overlap.
    """

    def __init__(self, delay: float = 0.0) -> None:
        super().__init__()
        self.delay = delay
        self.operations: list[str] = []
        self.trace: list[tuple[str, int | None]] = []
        self.recorded_requests: list[dict[str, Any]] = []
        self.connect_error: Exception | None = None
        self.close_error: Exception | None = None
        self._results: dict[str, Any] = dict(DEFAULT_RESULTS)
        self._queued: dict[str, deque[Any]] = defaultdict(deque)

    @property
    def methods(self) -> list[str]:
        """Methods of all requests sent through this transport."""
        return [r.get("method", "") for r in self.recorded_requests]

    @property
    def request_ids(self) -> list[int | None]:
        """Correlation ids of all requests sent through this transport."""
        return [r.get("id") for r in self.recorded_requests]

    def set_result(self, method: str, reply: Any) -> None:
        """Set the reply used for every call of ``method``."""
        self._results[method] = reply

    def queue(self, method: str, *replies: Any) -> None:
        """Queue one-shot replies for ``method``, used before the persistent one."""
        self._queued[method].extend(replies)

    def clear(self) -> None:
        """Forget recorded operations and requests."""
        self.operations.clear()
        self.trace.clear()
        self.recorded_requests.clear()

    async def _do_connect(self, url: httpx.URL) -> None:
        self.operations.append("connect")
        if self.connect_error is not None:
            raise self.connect_error

    async def _do_round_trip(self, body: bytes) -> bytes:
        request = json.loads(body)
        method = request.get("method", "")
        request_id = request.get("id")
        self.operations.append(f"round_trip:{method}")
        self.recorded_requests.append(request)

        self.trace.append(("enter", request_id))
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            reply = self._next_reply(method)
            if callable(reply) and not isinstance(reply, type):
                reply = reply(request)
            if isinstance(reply, BaseException):
                raise reply
            if isinstance(reply, bytes):
                return reply
            return json.dumps({"id": request_id, "result": reply}).encode("utf-8")
        finally:
            self.trace.append(("exit", request_id))

    async def _do_close(self) -> None:
        self.operations.append("close")
        if self.close_error is not None:
            raise self.close_error

    def _next_reply(self, method: str) -> Any:
        queued = self._queued.get(method)
        if queued:
            return queued.popleft()
        return self._results.get(method, True)


def remote_error(message: str, code: int | None = None) -> Callable[[dict[str, Any]], bytes]:
    """Reply with an error envelope for the request being answered."""

    def reply(request: dict[str, Any]) -> bytes:
        error: dict[str, Any] = {"message": message}
        if code is not None:
            error["code"] = code
        return json.dumps({"id": request.get("id"), "error": error}).encode("utf-8")

    return reply
