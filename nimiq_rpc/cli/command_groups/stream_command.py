"""Stream command group: print node notifications until stopped."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from nimiq_rpc import create_client
from nimiq_rpc.cli.shared.logging_utils import configure_cli_logging
from nimiq_rpc.cli.shared.params import to_jsonable
from nimiq_rpc.client import NimiqRPCClient
from nimiq_rpc.client.web_socket import CloseReason, Subscription, WebSocketCallbacks
from nimiq_rpc.config.loader import load_config
from nimiq_rpc.config.schema import Config
from nimiq_rpc.types.common import BlockSubscriptionType, RetrieveType
from nimiq_rpc.types.logs import RPCData
from nimiq_rpc.utils.exceptions import ConfigError, NimiqRpcError, sanitize_error_message

SubscribeFn = Callable[[NimiqRPCClient, WebSocketCallbacks], Awaitable[Subscription]]

_KINDS = {
    "all": None,
    "micro": BlockSubscriptionType.MICRO,
    "macro": BlockSubscriptionType.MACRO,
    "election": BlockSubscriptionType.ELECTION,
}


async def run_stream(console: Console, client: NimiqRPCClient, subscribe: SubscribeFn, limit: int = 0) -> int:
    """Print notifications until ``limit`` is reached or the stream gives up; returns the count."""
    done = asyncio.Event()
    received = 0
    exhausted = False

    def on_message(payload: RPCData) -> None:
        nonlocal received
        received += 1
        console.print_json(data=to_jsonable(payload.data))
        if limit and received >= limit:
            done.set()

    def on_error(error: Exception) -> None:
        console.print(f"[red]RPC error:[/red] {escape(str(error))}")

    def on_connection_error(error: Exception) -> None:
        console.print(f"[yellow]Connection error:[/yellow] {escape(sanitize_error_message(str(error)))}")

    def on_closed(reason: CloseReason) -> None:
        nonlocal exhausted
        if reason is CloseReason.RECONNECTS_EXHAUSTED:
            exhausted = True
            console.print("[red]Stream closed:[/red] reconnect attempts exhausted")
        done.set()

    callbacks = WebSocketCallbacks(
        on_message=on_message,
        on_error=on_error,
        on_connection_error=on_connection_error,
        on_closed=on_closed,
    )
    subscription = await subscribe(client, callbacks)
    try:
        await done.wait()
    finally:
        subscription.close()
    if exhausted:
        raise typer.Exit(1)
    return received


def register_stream_commands(app: typer.Typer, console: Console) -> None:
    """Register stream command group."""
    stream_app = typer.Typer(help="Subscribe to node streams over websocket")
    app.add_typer(stream_app, name="stream")

    def _config() -> Config:
        try:
            return load_config()
        except ConfigError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(1)

    def _run(name: str, config: Config, url: str | None, limit: int, logs: bool, subscribe: SubscribeFn) -> None:
        configure_cli_logging(f"stream-{name}", logs=logs, level=config.log_level)
        client = create_client(url or config.url, headers=config.headers)
        console.print(f"[dim]Streaming {name} from {client.ws.url} (Ctrl-C to stop)[/dim]")

        async def run() -> int:
            async with client:
                return await run_stream(console, client, subscribe, limit)

        try:
            count = asyncio.run(run())
        except KeyboardInterrupt:
            console.print("\n[dim]Stopped.[/dim]")
            return
        except NimiqRpcError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        console.print(f"[dim]{count} message(s) received[/dim]")

    @stream_app.command("blocks")
    def stream_blocks(
        kind: str = typer.Option("all", "--kind", "-k", help="all, micro, macro or election"),
        partial: bool = typer.Option(False, "--partial", help="Omit block bodies"),
        url: str = typer.Option(None, "--url", "-u", help="Node HTTP endpoint (default: config url)"),
        limit: int = typer.Option(0, "--limit", "-n", help="Stop after N messages (0 = until Ctrl-C)"),
        logs: bool = typer.Option(False, "--logs", help="Write logs to ~/.nimiq_rpc/logs"),
    ) -> None:
        """Stream new head blocks."""
        if kind not in _KINDS:
            console.print(f"[red]Unknown block kind:[/red] {kind}")
            raise typer.Exit(1)
        config = _config()
        retrieve = RetrieveType.PARTIAL if partial else RetrieveType.FULL

        async def subscribe(client: NimiqRPCClient, callbacks: WebSocketCallbacks) -> Subscription:
            return await client.blockchain_streams.subscribe_for_blocks(
                callbacks, retrieve=retrieve, kind=_KINDS[kind], options=config.ws
            )

        _run("blocks", config, url, limit, logs, subscribe)

    @stream_app.command("hashes")
    def stream_hashes(
        url: str = typer.Option(None, "--url", "-u", help="Node HTTP endpoint (default: config url)"),
        limit: int = typer.Option(0, "--limit", "-n", help="Stop after N messages (0 = until Ctrl-C)"),
        logs: bool = typer.Option(False, "--logs", help="Write logs to ~/.nimiq_rpc/logs"),
    ) -> None:
        """Stream head block hashes."""
        config = _config()

        async def subscribe(client: NimiqRPCClient, callbacks: WebSocketCallbacks) -> Subscription:
            return await client.blockchain_streams.subscribe_for_block_hashes(callbacks, config.ws)

        _run("hashes", config, url, limit, logs, subscribe)

    @stream_app.command("logs")
    def stream_logs(
        address: Optional[List[str]] = typer.Option(None, "--address", "-a", help="Address to watch (repeatable)"),
        log_type: Optional[List[str]] = typer.Option(None, "--type", "-t", help="Log type, e.g. transfer (repeatable)"),
        url: str = typer.Option(None, "--url", "-u", help="Node HTTP endpoint (default: config url)"),
        limit: int = typer.Option(0, "--limit", "-n", help="Stop after N messages (0 = until Ctrl-C)"),
        logs: bool = typer.Option(False, "--logs", help="Write logs to ~/.nimiq_rpc/logs"),
    ) -> None:
        """Stream block logs, optionally narrowed by address and log type."""
        config = _config()

        async def subscribe(client: NimiqRPCClient, callbacks: WebSocketCallbacks) -> Subscription:
            return await client.blockchain_streams.subscribe_for_logs_by_addresses_and_types(
                callbacks, addresses=address or [], types=log_type or [], options=config.ws
            )

        _run("logs", config, url, limit, logs, subscribe)

    @stream_app.command("election")
    def stream_election(
        address: str = typer.Argument(..., help="Validator address"),
        url: str = typer.Option(None, "--url", "-u", help="Node HTTP endpoint (default: config url)"),
        limit: int = typer.Option(0, "--limit", "-n", help="Stop after N messages (0 = until Ctrl-C)"),
        logs: bool = typer.Option(False, "--logs", help="Write logs to ~/.nimiq_rpc/logs"),
    ) -> None:
        """Stream election updates for one validator."""
        config = _config()

        async def subscribe(client: NimiqRPCClient, callbacks: WebSocketCallbacks) -> Subscription:
            return await client.blockchain_streams.subscribe_for_validator_election_by_address(
                address, callbacks, config.ws
            )

        _run("election", config, url, limit, logs, subscribe)
