"""Tests for the confd-client command line."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from confd_client import MockTransport
from confd_client.cli import main, parse_param
from confd_client.transport.mock import remote_error


@pytest.fixture
def transport(monkeypatch: pytest.MonkeyPatch) -> MockTransport:
    """Route every CLI connection through one mock transport."""
    mock = MockTransport()
    monkeypatch.setattr("confd_client.connection.HTTPTransport", lambda timeout: mock)
    for name in ("CONFD_URL", "CONFD_TIMEOUT", "CONFD_FACILITY", "CONFD_CLIENT_IP"):
        monkeypatch.delenv(name, raising=False)
    return mock


class TestParseParam:
    """Tests for parameter parsing."""

    def test_json_values(self) -> None:
        assert parse_param("1") == 1
        assert parse_param('{"a": [1]}') == {"a": [1]}
        assert parse_param("true") is True

    def test_plain_string(self) -> None:
        assert parse_param("network") == "network"


class TestCall:
    """Tests for the call command."""

    def test_call_prints_json(self, transport: MockTransport) -> None:
        transport.set_result("get_objects", [{"name": "lan"}])

        result = CliRunner().invoke(main, ["call", "get_objects", "network"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [{"name": "lan"}]
        assert transport.methods == ["new", "get_SID", "get_objects", "detach"]
        assert transport.recorded_requests[2]["params"] == ["network"]

    def test_call_json_params(self, transport: MockTransport) -> None:
        CliRunner().invoke(main, ["call", "set_object", '{"ref": "REF_1"}', "2"])

        assert transport.recorded_requests[2]["params"] == [{"ref": "REF_1"}, 2]

    def test_call_error_exit_status(self, transport: MockTransport) -> None:
        transport.set_result("get_object", remote_error("unknown reference"))

        result = CliRunner().invoke(main, ["call", "get_object", "REF_X"])

        assert result.exit_code == 1
        assert "Error: unknown reference" in result.output

    def test_url_option_sets_credentials(self, transport: MockTransport) -> None:
        CliRunner().invoke(main, ["--url", "http://admin:pw@10.0.0.1:4472/", "call", "ping"])

        assert transport.recorded_requests[0]["params"] == [
            {"username": "admin", "password": "pw"}
        ]

    def test_invalid_url(self, transport: MockTransport) -> None:
        result = CliRunner().invoke(main, ["--url", "ftp://nowhere/", "call", "ping"])

        assert result.exit_code == 1
        assert "Invalid confd URL" in result.output

    def test_invalid_timeout(self, transport: MockTransport) -> None:
        result = CliRunner().invoke(main, ["--timeout", "0", "call", "ping"])

        assert result.exit_code == 2
        assert "Timeout must be positive" in result.output


class TestErrors:
    """Tests for the errors command."""

    def test_prints_rendered_entries(self, transport: MockTransport) -> None:
        transport.set_result(
            "get_error_list",
            [{"message": "first"}, {"format": "Name %s in use", "attrs": ["lan"]}],
        )

        result = CliRunner().invoke(main, ["errors"])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["first", "Name lan in use"]
