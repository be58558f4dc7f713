"""Raw JSON-RPC channel over a single websocket connection.

One `WebSocketConnection` owns one socket and one reader task. Responses are
matched to pending requests by id; everything else is pushed to the
registered hooks (notifications, protocol errors, connection errors, close).
"""

from __future__ import annotations

import asyncio
import itertools
import json
from typing import Any, Callable, Protocol

import websockets
from loguru import logger
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.utils.exceptions import (
    CallTimeoutError,
    ConnectionClosedError,
    JsonRpcError,
    TransportError,
    sanitize_error_message,
)

NotificationHandler = Callable[[dict[str, Any]], None]
ProtocolErrorHandler = Callable[[JsonRpcError], None]
ConnectionErrorHandler = Callable[[Exception], None]
CloseHandler = Callable[[int | None, str], None]


class Connection(Protocol):
    """What the subscription engine needs from a transport connection."""

    @property
    def closed(self) -> bool: ...

    async def request(self, method: str, params: Any = (), timeout: float | None = None) -> Any: ...

    def on_notification(self, handler: NotificationHandler) -> None: ...

    def on_protocol_error(self, handler: ProtocolErrorHandler) -> None: ...

    def on_connection_error(self, handler: ConnectionErrorHandler) -> None: ...

    def on_close(self, handler: CloseHandler) -> None: ...

    def close(self) -> None: ...


class WebSocketConnection:
    """JSON-RPC 2.0 client channel on top of an open websocket."""

    def __init__(self, ws: Any, url: str = ""):
        self.url = url
        self._ws = ws
        self._ids = itertools.count(1)
        self._pending: dict[int, asyncio.Future] = {}
        self._closed = False
        self._close_task: asyncio.Task | None = None

        self._notification_handlers: list[NotificationHandler] = []
        self._protocol_error_handlers: list[ProtocolErrorHandler] = []
        self._connection_error_handlers: list[ConnectionErrorHandler] = []
        self._close_handlers: list[CloseHandler] = []

        self._reader = asyncio.get_running_loop().create_task(self._read_loop())

    @classmethod
    async def open(
        cls,
        url: str,
        *,
        open_timeout: float = 10.0,
        ping_interval: float | None = 20,
        ping_timeout: float | None = 20,
    ) -> "WebSocketConnection":
        """Connect to ``url`` and start reading frames."""
        logger.debug(f"Opening websocket connection to {url}")
        try:
            ws = await websockets.connect(
                url,
                open_timeout=open_timeout,
                ping_interval=ping_interval,
                ping_timeout=ping_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"websocket connect timeout: {url}",
                code="CONNECT_TIMEOUT",
                retryable=True,
            ) from exc
        except (OSError, WebSocketException) as exc:
            raise TransportError(
                f"websocket connect failed: {url}: {sanitize_error_message(str(exc))}",
                code="CONNECT_ERROR",
                retryable=True,
            ) from exc
        return cls(ws, url)

    @property
    def closed(self) -> bool:
        return self._closed

    def on_notification(self, handler: NotificationHandler) -> None:
        self._notification_handlers.append(handler)

    def on_protocol_error(self, handler: ProtocolErrorHandler) -> None:
        self._protocol_error_handlers.append(handler)

    def on_connection_error(self, handler: ConnectionErrorHandler) -> None:
        self._connection_error_handlers.append(handler)

    def on_close(self, handler: CloseHandler) -> None:
        """Register a hook for closes not initiated by `close()`."""
        self._close_handlers.append(handler)

    async def request(self, method: str, params: Any = (), timeout: float | None = None) -> Any:
        """Send a request and wait for its result; ``timeout`` is in seconds."""
        if self._closed:
            raise ConnectionClosedError(f"connection closed before calling '{method}'")
        request_id = next(self._ids)
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._pending[request_id] = future
        payload = RpcRequest(method, tuple(params or ())).to_payload(request_id)
        try:
            try:
                await self._ws.send(json.dumps(payload))
            except ConnectionClosed as exc:
                raise ConnectionClosedError(f"connection closed while calling '{method}'") from exc
            try:
                return await asyncio.wait_for(future, timeout)
            except asyncio.TimeoutError as exc:
                raise CallTimeoutError(method, (timeout or 0) * 1000) from exc
        finally:
            self._pending.pop(request_id, None)

    def close(self) -> None:
        """Close the socket without firing close hooks. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._fail_pending(ConnectionClosedError("connection closed by client"))
        self._close_task = asyncio.get_running_loop().create_task(self._shutdown())

    async def _shutdown(self) -> None:
        try:
            await self._ws.close()
        except Exception as e:
            logger.debug(f"Websocket close failed: {e}")
        if self._reader is not asyncio.current_task():
            self._reader.cancel()

    async def _read_loop(self) -> None:
        try:
            async for raw in self._ws:
                self._dispatch(raw)
        except asyncio.CancelledError:
            raise
        except ConnectionClosedOK:
            pass
        except Exception as e:
            if not self._closed:
                logger.warning(f"Websocket connection error on {self.url}: {sanitize_error_message(str(e))}")
                self._emit(self._connection_error_handlers, e)
        finally:
            if not self._closed:
                self._closed = True
                code = getattr(self._ws, "close_code", None)
                reason = getattr(self._ws, "close_reason", None) or ""
                self._fail_pending(ConnectionClosedError("connection closed by peer", close_code=code))
                logger.debug(f"Websocket {self.url} closed (code={code}, reason={reason!r})")
                for handler in list(self._close_handlers):
                    try:
                        handler(code, reason)
                    except Exception:
                        logger.exception("Close handler failed")

    def _dispatch(self, raw: Any) -> None:
        try:
            frame = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Invalid JSON from node: {str(raw)[:100]}")
            self._emit(self._protocol_error_handlers, JsonRpcError(JsonRpcError.PARSE_ERROR, "Parse error"))
            return
        if not isinstance(frame, dict):
            self._emit(
                self._protocol_error_handlers,
                JsonRpcError(JsonRpcError.INVALID_REQUEST, "Unexpected frame shape"),
            )
            return

        request_id = frame.get("id")
        if request_id is not None and ("result" in frame or "error" in frame):
            future = self._pending.get(request_id)
            if future is None or future.done():
                if "error" in frame:
                    self._emit(self._protocol_error_handlers, JsonRpcError.from_payload(frame["error"]))
                else:
                    logger.debug(f"Dropping response for unknown request id {request_id}")
                return
            if "error" in frame:
                future.set_exception(JsonRpcError.from_payload(frame["error"]))
            else:
                future.set_result(frame.get("result"))
            return

        if "method" in frame:
            params = frame.get("params")
            self._emit(self._notification_handlers, params if isinstance(params, dict) else {"result": params})
            return

        if "error" in frame:
            self._emit(self._protocol_error_handlers, JsonRpcError.from_payload(frame["error"]))
            return

        logger.debug(f"Ignoring unrecognised frame: {str(raw)[:100]}")

    def _fail_pending(self, exc: Exception) -> None:
        for future in self._pending.values():
            if not future.done():
                future.set_exception(exc)
        self._pending.clear()

    @staticmethod
    def _emit(handlers: list[Callable[[Any], None]], value: Any) -> None:
        for handler in list(handlers):
            try:
                handler(value)
            except Exception:
                logger.exception("Connection hook failed")
