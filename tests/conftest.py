"""Pytest hooks and fixtures."""

import asyncio
import os

import pytest

from nimiq_rpc.utils.exceptions import ConnectionClosedError, JsonRpcError, TransportError


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "requires_node: talks to a live Nimiq node (skipped in CI)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip requires_node tests when running in CI (no node available)."""
    if os.environ.get("CI") != "true":
        return
    skip = pytest.mark.skip(reason="Requires a live Nimiq node (skipped in CI)")
    for item in items:
        if "requires_node" in item.keywords:
            item.add_marker(skip)


class FakeConnection:
    """In-memory stand-in for `WebSocketConnection` with test-side push/drop helpers."""

    def __init__(self, url: str, *, subscription_id: int = 1, hold: bool = False, reject=None):
        self.url = url
        self.subscription_id = subscription_id
        self.hold = hold
        self.reject = reject
        self.requests: list[tuple[str, tuple]] = []
        self.timeouts: list[float | None] = []
        self.close_calls = 0
        self._closed = False
        self._held: asyncio.Future | None = None
        self._notification_handlers = []
        self._protocol_error_handlers = []
        self._connection_error_handlers = []
        self._close_handlers = []

    @property
    def closed(self) -> bool:
        return self._closed

    def on_notification(self, handler) -> None:
        self._notification_handlers.append(handler)

    def on_protocol_error(self, handler) -> None:
        self._protocol_error_handlers.append(handler)

    def on_connection_error(self, handler) -> None:
        self._connection_error_handlers.append(handler)

    def on_close(self, handler) -> None:
        self._close_handlers.append(handler)

    async def request(self, method, params=(), timeout=None):
        self.requests.append((method, tuple(params)))
        self.timeouts.append(timeout)
        if self._closed:
            raise ConnectionClosedError()
        if self.hold:
            self._held = asyncio.get_running_loop().create_future()
            await self._held
        if self.reject is not None:
            raise self.reject
        return self.subscription_id

    def close(self) -> None:
        self.close_calls += 1
        if self._closed:
            return
        self._closed = True
        self._fail_held()

    def _fail_held(self) -> None:
        if self._held is not None and not self._held.done():
            self._held.set_exception(ConnectionClosedError())

    # Test-side helpers

    def release(self) -> None:
        if self._held is not None and not self._held.done():
            self._held.set_result(None)

    def push(self, data, metadata=None) -> None:
        result = {"data": data} if metadata is None else {"data": data, "metadata": metadata}
        for handler in list(self._notification_handlers):
            handler({"subscription": self.subscription_id, "result": result})

    def push_error(self, error) -> None:
        for handler in list(self._protocol_error_handlers):
            handler(error)

    def fail(self, exc: Exception) -> None:
        for handler in list(self._connection_error_handlers):
            handler(exc)

    def drop(self, code: int = 1006, reason: str = "") -> None:
        """Simulate the peer going away."""
        self._closed = True
        self._fail_held()
        for handler in list(self._close_handlers):
            handler(code, reason)


class FakeConnector:
    """
    Connector returning `FakeConnection`s.

    ``plan`` lists what each successive attempt does: "ok", "refuse" (connect
    raises), "hold" (subscribe call waits for `release`) or "reject"
    (subscribe answered with a JSON-RPC error). Past the end of the plan
    attempts succeed.
    """

    def __init__(self, plan=()):
        self.plan = list(plan)
        self.attempts = 0
        self.urls: list[str] = []
        self.connections: list[FakeConnection] = []
        self.gate: asyncio.Event | None = None

    async def __call__(self, url: str) -> FakeConnection:
        self.attempts += 1
        self.urls.append(url)
        action = self.plan.pop(0) if self.plan else "ok"
        if self.gate is not None:
            await self.gate.wait()
        if action == "refuse":
            raise TransportError(f"websocket connect failed: {url}", code="CONNECT_ERROR", retryable=True)
        connection = FakeConnection(
            url,
            subscription_id=len(self.connections) + 1,
            hold=action == "hold",
            reject=JsonRpcError(-32601, "Method not found") if action == "reject" else None,
        )
        self.connections.append(connection)
        return connection

    @property
    def last(self) -> FakeConnection:
        return self.connections[-1]


async def wait_until(predicate, timeout: float = 2.0) -> None:
    """Poll ``predicate`` on the running loop until it holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point ~ at a temp dir so config and log files stay out of the real home."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("NIMIQ_RPC_"):
            monkeypatch.delenv(key)
    return tmp_path


@pytest.fixture
def make_connector():
    return FakeConnector


@pytest.fixture
def until():
    return wait_until
