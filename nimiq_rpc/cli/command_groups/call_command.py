"""Raw JSON-RPC call command."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from nimiq_rpc import create_client
from nimiq_rpc.cli.shared.logging_utils import configure_cli_logging
from nimiq_rpc.cli.shared.params import parse_value, to_jsonable
from nimiq_rpc.config.loader import load_config
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData
from nimiq_rpc.utils.exceptions import ConfigError, NimiqRpcError


def register_call_commands(app: typer.Typer, console: Console) -> None:
    """Register the top-level call command."""

    @app.command("call")
    def call(
        method: str = typer.Argument(..., help="JSON-RPC method, e.g. getBlockNumber"),
        params: Optional[List[str]] = typer.Argument(None, help="Positional params; each parsed as JSON when possible"),
        url: str = typer.Option(None, "--url", "-u", help="Node HTTP endpoint (default: config url)"),
        timeout_ms: float = typer.Option(None, "--timeout-ms", help="Call timeout in milliseconds"),
        logs: bool = typer.Option(False, "--logs", help="Write logs to ~/.nimiq_rpc/logs/call.log"),
        debug: bool = typer.Option(False, "--debug", help="Print debug logs to stderr"),
    ) -> None:
        """Make a raw JSON-RPC call over HTTP and print the result."""
        try:
            config = load_config()
        except ConfigError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(1)
        configure_cli_logging("call", debug=debug, logs=logs, level=config.log_level)

        options = HttpOptions(timeout_ms=timeout_ms) if timeout_ms else config.http
        request = RpcRequest(method, [parse_value(p) for p in params or []])

        async def run() -> RPCData:
            async with create_client(url or config.url, headers=config.headers) as client:
                return await client.call(request, options)

        try:
            result = asyncio.run(run())
        except NimiqRpcError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)

        console.print_json(data=to_jsonable(result.data))
        if result.metadata is not None:
            console.print("[dim]metadata:[/dim]")
            console.print_json(data=to_jsonable(result.metadata))
