"""Session options sent to confd with the ``new`` call."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError

# Facility used for sessions opened on behalf of a WebAdmin user
WEBADMIN_FACILITY = "webadmin"


class Options(BaseModel):
    """Connection options.

    Serialized as the single parameter of the ``new`` call. The session id
    is filled in once by the handshake and read-only afterwards; setting it
    up front reattaches to an existing session and skips ``get_SID``.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    username: str = ""
    password: str = ""
    facility: str = ""
    ip: str = Field(default="", alias="client_ip")
    sid: Any | None = Field(default=None, alias="SID")

    @classmethod
    def from_url(cls, url: httpx.URL) -> Options:
        """Derive options from the user info and query of an endpoint URL."""
        return cls(
            username=url.username,
            password=url.password,
            facility=url.params.get("facility", ""),
        )

    def to_params(self) -> dict[str, Any]:
        """Wire form with unset values omitted."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        return {key: value for key, value in data.items() if value != ""}

    def assign_sid(self, sid: Any) -> None:
        """Store the session id returned by the handshake."""
        if self.sid is not None:
            raise ConfigurationError("Session id is already assigned")
        self.sid = sid


def parse_url(url: str) -> httpx.URL:
    """Parse an endpoint URL, raising ConfigurationError when invalid."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigurationError(f"Invalid confd URL: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigurationError("Invalid confd URL: expected http://host:port/")
    return parsed
