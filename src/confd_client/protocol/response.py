"""Response envelope and daemon error entries.

Responses echo the request id and carry either a result or an error:

    {"id": 7, "result": {...}, "error": null}

Two answers are ambiguous and raise AmbiguousResponseError subclasses
instead of a result: a missing/null result (EmptyResponseError) and the
failure return code ``0``/``false`` (ReturnCodeError).
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError

from ..errors import DecodeError, EmptyResponseError, RemoteError, ReturnCodeError


class ErrorEntry(BaseModel):
    """One structured error from the daemon's error list."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = ""
    message: str | None = None
    format: str | None = None
    attrs: list[Any] = Field(default_factory=list)
    fatal: bool = False
    error_class: str | None = Field(default=None, alias="class")

    def render(self) -> str:
        """Human readable message.

        Prefers the explicit message, then the printf style format with
        attrs substituted, then the error name.
        """
        if self.message:
            return self.message
        if self.format:
            if not self.attrs:
                return self.format
            try:
                return self.format % tuple(self.attrs)
            except (TypeError, ValueError):
                return self.format
        return self.name or "unknown confd error"

    def __str__(self) -> str:
        return self.render()


def is_failure_code(value: Any) -> bool:
    """Check for the bare failure return code (0 or false)."""
    if isinstance(value, bool):
        return value is False
    return isinstance(value, int) and value == 0


class Response(BaseModel):
    """A parsed response envelope."""

    id: StrictInt | None = None
    result: Any = None
    error: Any = None

    @classmethod
    def parse(cls, raw: bytes, expected_id: int) -> Response:
        """Parse a raw body and check it answers request ``expected_id``.

        Raises:
            EmptyResponseError: If the body is empty
            DecodeError: If the body is malformed or the id does not match
            RemoteError: If the envelope carries an explicit error
        """
        if not raw or not raw.strip():
            raise EmptyResponseError()

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise DecodeError(f"Malformed response body: {e}") from e
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")

        try:
            response = cls.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Invalid response envelope: {e}") from e

        if response.id is None:
            raise DecodeError(f"Response has no id, expected {expected_id}")
        if response.id != expected_id:
            raise DecodeError(f"Response id {response.id} does not match request id {expected_id}")

        if response.error is not None:
            raise response._remote_error()
        return response

    def decode(self, result_type: Any = Any, check_return_code: bool = True) -> Any:
        """Validate the result into ``result_type``.

        ``check_return_code=False`` skips the failure sentinel check, used
        for calls whose legitimate result can look like one (``get_SID``).

        Raises:
            EmptyResponseError: If there is no result
            ReturnCodeError: If the result is the failure return code
            DecodeError: If the result does not fit ``result_type``
        """
        if self.result is None:
            raise EmptyResponseError()
        if check_return_code and is_failure_code(self.result):
            raise ReturnCodeError()
        if result_type is Any:
            return self.result
        try:
            return TypeAdapter(result_type).validate_python(self.result)
        except ValidationError as e:
            raise DecodeError(f"Unexpected result shape: {e}") from e

    def _remote_error(self) -> RemoteError:
        error = self.error
        if isinstance(error, dict):
            code = error.get("code")
            message = error.get("message") or error.get("name") or json.dumps(error)
            return RemoteError(str(message), code=code if isinstance(code, int) else None)
        return RemoteError(str(error))

    def __str__(self) -> str:
        return json.dumps(
            {"id": self.id, "result": self.result, "error": self.error},
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
