"""confd command line client.

Usage:
    confd-client call get_objects network          # Untyped call, JSON output
    confd-client call set_object '{"ref": "X"}'    # JSON parameters
    confd-client --url http://admin:pw@utm:4472/ call get_SID
    confd-client errors                            # Show the session error list

The endpoint defaults to CONFD_URL (or the local daemon).
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import Any

import click

from .config import ConnectionConfig
from .connection import Connection
from .errors import ConfdError, ConfigurationError

logger = logging.getLogger("confd_client.cli")


def parse_param(value: str) -> Any:
    """Decode a parameter as JSON, falling back to the plain string."""
    try:
        return json.loads(value)
    except ValueError:
        return value


def _run(obj: dict[str, Any], action: Callable[[Connection], Awaitable[Any]]) -> Any:
    """Open a connection, run ``action`` on it and close it again."""

    async def _session() -> Any:
        sink = logger if obj["verbose"] else None
        async with Connection.from_config(obj["config"], logger=sink) as conn:
            return await action(conn)

    return asyncio.run(_session())


@click.group()
@click.option("--url", default=None, help="confd endpoint (default: $CONFD_URL or local daemon)")
@click.option("--timeout", type=float, default=None, help="Transport timeout in seconds")
@click.option("-v", "--verbose", is_flag=True, help="Log the protocol exchange (passwords masked)")
@click.pass_context
def main(ctx: click.Context, url: str | None, timeout: float | None, verbose: bool) -> None:
    """confd client - call procedures on a confd daemon."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        config = ConnectionConfig.from_env()
        if url:
            config = replace(config, url=url)
        if timeout is not None:
            config = replace(config, timeout=timeout)
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    ctx.obj = {"config": config, "verbose": verbose}


@main.command()
@click.argument("method")
@click.argument("params", nargs=-1)
@click.pass_obj
def call(obj: dict[str, Any], method: str, params: tuple[str, ...]) -> None:
    """Call METHOD with PARAMS and print the result as JSON."""
    try:
        values = [parse_param(p) for p in params]
        result = _run(obj, lambda conn: conn.simple_request(method, *values))
    except ConfdError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(json.dumps(result, indent=2, ensure_ascii=False))


@main.command()
@click.pass_obj
def errors(obj: dict[str, Any]) -> None:
    """Print the error list of a fresh session."""
    try:
        entries = _run(obj, lambda conn: conn.error_list())
    except ConfdError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    for entry in entries:
        click.echo(entry.render())


if __name__ == "__main__":
    main()
