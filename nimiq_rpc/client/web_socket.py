"""Websocket subscriptions with transparent reconnect.

`WebSocketClient.subscribe` turns one subscribe request into a durable event
stream: every notification on the live connection is filtered and handed to
the caller's callbacks, and when the connection drops unexpectedly a fresh
connection is opened after a fixed delay and the original request replayed,
up to `max_reconnect_attempts` consecutive failures.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Awaitable, Callable
from urllib.parse import urlparse, urlunparse

from loguru import logger

from nimiq_rpc.client.transport import Connection, WebSocketConnection
from nimiq_rpc.config.schema import DEFAULT_CLIENT_OPTIONS, WebSocketClientOptions
from nimiq_rpc.types.common import FilterStreamFn, RpcRequest
from nimiq_rpc.types.logs import RPCData
from nimiq_rpc.utils.exceptions import JsonRpcError, sanitize_error_message

Connector = Callable[[str], Awaitable[Connection]]


def accept_all(_data: Any) -> bool:
    return True


def derive_ws_url(url: str) -> str:
    """
    Map a node HTTP endpoint to its websocket endpoint.

    http -> ws, https -> wss; the path becomes /ws unless one is given.
    """
    parsed = urlparse(url.strip())
    if parsed.scheme in ("http", "ws"):
        scheme = "ws"
    elif parsed.scheme in ("https", "wss"):
        scheme = "wss"
    else:
        raise ValueError(f"Unsupported node URL scheme: {url!r}")
    path = parsed.path if parsed.path not in ("", "/") else "/ws"
    return urlunparse(parsed._replace(scheme=scheme, path=path, fragment=""))


class SubscriptionState(str, Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    CLOSED = "closed"


class CloseReason(str, Enum):
    CLIENT_CLOSED = "client_closed"
    RECONNECTS_EXHAUSTED = "reconnects_exhausted"


@dataclass
class WebSocketCallbacks:
    """Caller hooks for one subscription. All optional."""
    on_message: Callable[[RPCData], None] | None = None
    on_error: Callable[[JsonRpcError], None] | None = None
    on_connection_error: Callable[[Exception], None] | None = None
    on_closed: Callable[[CloseReason], None] | None = None


class Subscription:
    """Handle for a live subscription; survives reconnects until closed."""

    def __init__(
        self,
        url: str,
        request: RpcRequest,
        callbacks: WebSocketCallbacks,
        options: WebSocketClientOptions,
        filter: FilterStreamFn,
        connector: Connector,
    ):
        self.url = url
        self.request = request
        self.callbacks = callbacks
        self.options = options
        self._filter = filter
        self._connector = connector

        self._connection: Connection | None = None
        self._subscription_id = 0
        self._disconnects = 0
        self._force_closed = False
        self._state = SubscriptionState.CONNECTING
        self._reconnect_task: asyncio.Task | None = None

    @property
    def state(self) -> SubscriptionState:
        return self._state

    @property
    def disconnects(self) -> int:
        """Consecutive unexpected disconnects since the last successful subscribe."""
        return self._disconnects

    @property
    def closed(self) -> bool:
        return self._state is SubscriptionState.CLOSED

    def get_subscription_id(self) -> int:
        """Most recent id issued by the node; stale while a reconnect is in flight."""
        return self._subscription_id

    def close(self) -> None:
        """Stop the stream. Idempotent and safe to call from any callback."""
        if self._force_closed:
            return
        self._force_closed = True
        connection, self._connection = self._connection, None
        if connection is not None:
            connection.close()
        task, self._reconnect_task = self._reconnect_task, None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
        logger.info(f"Subscription {self.request.method}#{self._subscription_id} closed by client")
        self._finish(CloseReason.CLIENT_CLOSED)

    async def start(self) -> "Subscription":
        """Open the first connection and subscribe; failures propagate to the caller."""
        connection = await self._connector(self.url)
        if self._force_closed:
            connection.close()
            return self
        self._install(connection)
        try:
            self._subscription_id = await self._subscribe(connection)
        except BaseException as e:
            if self._connection is connection:
                self._connection = None
            connection.close()
            if self._force_closed and isinstance(e, Exception):
                # close() was called from a callback while subscribing.
                return self
            self._state = SubscriptionState.CLOSED
            raise
        if self._force_closed:
            return self
        self._state = SubscriptionState.CONNECTED
        logger.info(f"Subscribed to {self.request.method} (id={self._subscription_id}) on {self.url}")
        if connection is not self._connection:
            # The peer hung up between the subscribe reply and this resume.
            logger.warning(f"Subscription {self.request.method} lost its connection right after subscribing")
            self._schedule_reconnect()
        return self

    async def _subscribe(self, connection: Connection) -> int:
        result = await connection.request(
            self.request.method,
            self.request.params,
            timeout=self.options.call_timeout_ms / 1000,
        )
        return int(result)

    def _install(self, connection: Connection) -> None:
        self._connection = connection
        connection.on_notification(partial(self._handle_notification, connection))
        connection.on_protocol_error(partial(self._handle_protocol_error, connection))
        connection.on_connection_error(partial(self._handle_connection_error, connection))
        connection.on_close(partial(self._handle_close, connection))

    def _is_live(self, connection: Connection) -> bool:
        return not self._force_closed and connection is self._connection

    def _handle_notification(self, connection: Connection, params: dict[str, Any]) -> None:
        if not self._is_live(connection):
            return
        payload = RPCData.from_result(params.get("result"))
        try:
            if not self._filter(payload.data):
                return
        except Exception:
            logger.exception(f"Filter for {self.request.method} raised; dropping notification")
            return
        if self.callbacks.on_message:
            self._invoke(self.callbacks.on_message, payload)

    def _handle_protocol_error(self, connection: Connection, error: JsonRpcError) -> None:
        if not self._is_live(connection):
            return
        logger.debug(f"Protocol error on {self.request.method}: {error}")
        if self.callbacks.on_error:
            self._invoke(self.callbacks.on_error, error)

    def _handle_connection_error(self, connection: Connection, exc: Exception) -> None:
        if not self._is_live(connection):
            return
        if self.callbacks.on_connection_error:
            self._invoke(self.callbacks.on_connection_error, exc)

    def _handle_close(self, connection: Connection, code: int | None, reason: str) -> None:
        if connection is not self._connection:
            return
        self._connection = None
        if self._force_closed or self._state is SubscriptionState.CONNECTING:
            return
        logger.warning(f"Subscription {self.request.method} lost its connection (code={code}, reason={reason!r})")
        self._schedule_reconnect()

    def _schedule_reconnect(self) -> None:
        self._disconnects += 1
        if self._disconnects > self.options.max_reconnect_attempts:
            logger.warning(
                f"Giving up on {self.request.method} after {self.options.max_reconnect_attempts} reconnect attempts"
            )
            self._finish(CloseReason.RECONNECTS_EXHAUSTED)
            return
        self._state = SubscriptionState.RECONNECTING
        logger.info(
            f"Reconnecting {self.request.method} in {self.options.reconnect_delay_ms:g}ms "
            f"(attempt {self._disconnects}/{self.options.max_reconnect_attempts})"
        )
        self._reconnect_task = asyncio.get_running_loop().create_task(self._reconnect())

    async def _reconnect(self) -> None:
        await asyncio.sleep(self.options.reconnect_delay_ms / 1000)
        if self._force_closed:
            return

        try:
            connection = await self._connector(self.url)
        except Exception as e:
            if self._force_closed:
                return
            logger.warning(f"Reconnect to {self.url} failed: {sanitize_error_message(str(e))}")
            self._reconnect_failed(e)
            return

        if self._force_closed:
            # close() won the race; never adopt this connection.
            connection.close()
            return
        self._install(connection)

        try:
            subscription_id = await self._subscribe(connection)
        except Exception as e:
            if self._force_closed or connection is not self._connection:
                # Closed by the caller, or the close hook already counted this drop.
                return
            self._connection = None
            connection.close()
            logger.warning(f"Re-subscribe to {self.request.method} failed: {e}")
            self._reconnect_failed(e)
            return

        if not self._is_live(connection):
            return
        self._subscription_id = subscription_id
        self._disconnects = 0
        self._state = SubscriptionState.CONNECTED
        logger.info(f"Re-subscribed to {self.request.method} (id={subscription_id})")

    def _reconnect_failed(self, exc: Exception) -> None:
        if self.callbacks.on_connection_error:
            self._invoke(self.callbacks.on_connection_error, exc)
        if not self._force_closed:
            self._schedule_reconnect()

    def _finish(self, reason: CloseReason) -> None:
        if self._state is SubscriptionState.CLOSED:
            return
        self._state = SubscriptionState.CLOSED
        if self.callbacks.on_closed:
            self._invoke(self.callbacks.on_closed, reason)

    def _invoke(self, callback: Callable[[Any], None], value: Any) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception(f"Callback {getattr(callback, '__name__', callback)!r} for {self.request.method} failed")


class WebSocketClient:
    """Opens subscriptions against a node's websocket endpoint."""

    def __init__(self, url: str, *, connector: Connector | None = None):
        self.url = derive_ws_url(url)
        self._connector = connector or WebSocketConnection.open

    async def subscribe(
        self,
        request: RpcRequest,
        callbacks: WebSocketCallbacks | None = None,
        options: WebSocketClientOptions | None = None,
        filter: FilterStreamFn | None = None,
    ) -> Subscription:
        """
        Subscribe to a node event stream.

        Returns once the first subscribe call succeeded; if it fails the error
        is raised here and nothing is retried.
        """
        subscription = Subscription(
            self.url,
            request,
            callbacks or WebSocketCallbacks(),
            options or DEFAULT_CLIENT_OPTIONS,
            filter or accept_all,
            self._connector,
        )
        return await subscription.start()
