"""Request envelope.

A request is one procedure call. Parameters are positional and the id
correlates the response with the request:

    {"method": "get_object", "params": ["REF_DefaultInternalNetwork"], "id": 7}

Bodies are rendered compactly (no whitespace after separators) so log
redaction sees the same ``password":"..."`` shape the daemon does.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from ..errors import EncodeError


def _jsonable(value: Any) -> Any:
    """json.dumps fallback for models passed as parameters."""
    to_params = getattr(value, "to_params", None)
    if callable(to_params):
        return to_params()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class Request(BaseModel):
    """A correlated procedure call."""

    method: str
    params: list[Any] = Field(default_factory=list)
    id: int

    _body: bytes = PrivateAttr(default=b"")

    @classmethod
    def build(
        cls,
        method: str,
        params: Sequence[Any],
        correlation_id: int,
    ) -> Request:
        """Build and encode a request.

        Raises:
            EncodeError: If a parameter cannot be encoded as JSON
        """
        request = cls(method=method, params=list(params), id=correlation_id)
        try:
            body = json.dumps(
                {"method": request.method, "params": request.params, "id": request.id},
                default=_jsonable,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as e:
            raise EncodeError(f"Cannot encode parameters for {method!r}: {e}") from e
        request._body = body.encode("utf-8")
        return request

    def encode(self) -> bytes:
        """Serialized body as sent on the wire."""
        return self._body

    def __str__(self) -> str:
        return self._body.decode("utf-8")
