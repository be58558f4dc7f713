"""Tests for reconnecting websocket subscriptions."""

from __future__ import annotations

import asyncio

import pytest

from nimiq_rpc.client.web_socket import (
    CloseReason,
    SubscriptionState,
    WebSocketCallbacks,
    WebSocketClient,
)
from nimiq_rpc.config.schema import WebSocketClientOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.utils.exceptions import ConnectionClosedError, JsonRpcError, TransportError

HEAD_HASH = RpcRequest("subscribeForHeadBlockHash")
FAST = WebSocketClientOptions(reconnect_delay_ms=10, max_reconnect_attempts=2)


class Recorder:
    """Collects everything the subscription reports."""

    def __init__(self):
        self.messages = []
        self.errors = []
        self.connection_errors = []
        self.closed = []

    def callbacks(self) -> WebSocketCallbacks:
        return WebSocketCallbacks(
            on_message=self.messages.append,
            on_error=self.errors.append,
            on_connection_error=self.connection_errors.append,
            on_closed=self.closed.append,
        )

    @property
    def data(self):
        return [m.data for m in self.messages]


@pytest.mark.asyncio
async def test_subscribe_returns_connected_handle(make_connector) -> None:
    connector = make_connector()
    client = WebSocketClient("http://localhost:8648", connector=connector)

    sub = await client.subscribe(HEAD_HASH)

    assert connector.urls == ["ws://localhost:8648/ws"]
    assert sub.state is SubscriptionState.CONNECTED
    assert sub.get_subscription_id() == 1
    assert sub.disconnects == 0
    assert sub.request is HEAD_HASH
    assert connector.last.requests == [("subscribeForHeadBlockHash", ())]
    assert connector.last.timeouts == [30.0]


@pytest.mark.asyncio
async def test_notifications_carry_data_and_metadata(make_connector) -> None:
    connector = make_connector()
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    await client.subscribe(HEAD_HASH, rec.callbacks())

    connector.last.push("hash-1")
    connector.last.push({"number": 7}, metadata={"blockHash": "abc"})

    assert rec.data == ["hash-1", {"number": 7}]
    assert rec.messages[0].metadata is None
    assert rec.messages[1].metadata == {"blockHash": "abc"}


@pytest.mark.asyncio
async def test_filter_delivers_only_even_block_numbers(make_connector) -> None:
    connector = make_connector()
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    await client.subscribe(HEAD_HASH, rec.callbacks(), filter=lambda data: data["number"] % 2 == 0)

    for number in (1, 2, 3, 4):
        connector.last.push({"number": number})

    assert rec.data == [{"number": 2}, {"number": 4}]


@pytest.mark.asyncio
async def test_filter_exception_drops_only_that_notification(make_connector) -> None:
    connector = make_connector()
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    await client.subscribe(HEAD_HASH, rec.callbacks(), filter=lambda data: data["number"] > 0)

    connector.last.push({"hash": "no-number"})
    connector.last.push({"number": 1})

    assert rec.data == [{"number": 1}]
    assert rec.errors == []


@pytest.mark.asyncio
async def test_close_twice_is_idempotent(make_connector) -> None:
    connector = make_connector()
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks())

    sub.close()
    sub.close()

    assert connector.last.close_calls == 1
    assert rec.closed == [CloseReason.CLIENT_CLOSED]
    assert sub.state is SubscriptionState.CLOSED
    assert sub.closed


@pytest.mark.asyncio
async def test_no_delivery_or_reconnect_after_close(make_connector) -> None:
    connector = make_connector()
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)
    connection = connector.last

    sub.close()
    connection.push("late")
    connection.drop()
    await asyncio.sleep(0.05)

    assert rec.messages == []
    assert connector.attempts == 1
    assert rec.closed == [CloseReason.CLIENT_CLOSED]


@pytest.mark.asyncio
async def test_close_from_inside_on_message(make_connector) -> None:
    connector = make_connector()
    received = []
    handle = []

    def on_message(payload) -> None:
        received.append(payload.data)
        handle[0].close()

    client = WebSocketClient("http://localhost:8648", connector=connector)
    handle.append(await client.subscribe(HEAD_HASH, WebSocketCallbacks(on_message=on_message)))

    connector.last.push(1)
    connector.last.push(2)

    assert received == [1]
    assert handle[0].closed


@pytest.mark.asyncio
async def test_reconnect_attempts_are_bounded(make_connector, until) -> None:
    connector = make_connector(["ok", "refuse", "refuse", "refuse", "refuse"])
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)

    connector.last.drop()
    assert sub.state is SubscriptionState.RECONNECTING
    await until(lambda: sub.closed)
    await asyncio.sleep(0.05)

    assert connector.attempts - 1 == 2
    assert len(rec.connection_errors) == 2
    assert all(isinstance(e, TransportError) for e in rec.connection_errors)
    assert rec.closed == [CloseReason.RECONNECTS_EXHAUSTED]


@pytest.mark.asyncio
async def test_rejected_resubscribe_counts_as_failed_attempt(make_connector, until) -> None:
    connector = make_connector(["ok", "reject", "reject", "reject"])
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)

    connector.last.drop()
    await until(lambda: sub.closed)

    assert connector.attempts == 3
    assert [c.close_calls for c in connector.connections[1:]] == [1, 1]
    assert all(isinstance(e, JsonRpcError) for e in rec.connection_errors)
    assert rec.closed == [CloseReason.RECONNECTS_EXHAUSTED]


@pytest.mark.asyncio
async def test_drop_during_resubscribe_is_counted_once(make_connector, until) -> None:
    connector = make_connector(["ok", "hold"])
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    options = WebSocketClientOptions(reconnect_delay_ms=10, max_reconnect_attempts=1)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), options)

    connector.last.drop()
    await until(lambda: len(connector.connections) == 2 and connector.last.requests)
    connector.last.drop()
    await until(lambda: sub.closed)
    await asyncio.sleep(0.05)

    assert sub.disconnects == 2
    assert connector.attempts == 2
    assert rec.closed == [CloseReason.RECONNECTS_EXHAUSTED]


@pytest.mark.asyncio
async def test_successful_reconnect_resets_counter(make_connector, until) -> None:
    connector = make_connector(["ok", "refuse", "ok", "refuse", "ok"])
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)

    connector.last.drop()
    await until(lambda: sub.state is SubscriptionState.CONNECTED)
    assert sub.disconnects == 0
    assert sub.get_subscription_id() == 2

    # Without the reset this second drop would exceed the budget immediately.
    connector.last.drop()
    await until(lambda: sub.state is SubscriptionState.CONNECTED)

    assert connector.attempts == 5
    assert sub.get_subscription_id() == 3
    assert rec.closed == []
    assert len(rec.connection_errors) == 2


@pytest.mark.asyncio
async def test_reconnect_replays_original_request(make_connector, until) -> None:
    connector = make_connector()
    request = RpcRequest("subscribeForLogsByAddressesAndTypes", (["NQ07 0000"], ["transfer"]))
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(request, options=FAST)

    for expected in (2, 3):
        connector.last.drop()
        await until(lambda: sub.get_subscription_id() == expected)

    assert len(connector.connections) == 3
    for connection in connector.connections:
        assert connection.requests == [("subscribeForLogsByAddressesAndTypes", (["NQ07 0000"], ["transfer"]))]
        assert connection.timeouts == [FAST.call_timeout_ms / 1000]
    assert request.params == (["NQ07 0000"], ["transfer"])


@pytest.mark.asyncio
async def test_subscription_id_is_stale_until_resubscribed(make_connector, until) -> None:
    connector = make_connector(["ok", "hold"])
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, options=FAST)

    connector.last.drop()
    await until(lambda: len(connector.connections) == 2 and connector.last.requests)
    assert sub.get_subscription_id() == 1

    connector.last.release()
    await until(lambda: sub.state is SubscriptionState.CONNECTED)
    assert sub.get_subscription_id() == 2


@pytest.mark.asyncio
async def test_close_while_reconnect_connects_never_adopts(make_connector, until) -> None:
    connector = make_connector()
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)

    connector.gate = asyncio.Event()
    connector.last.drop()
    await until(lambda: connector.attempts == 2)
    sub.close()
    connector.gate.set()
    await asyncio.sleep(0.05)

    assert len(connector.connections) == 1
    assert sub.closed
    assert rec.closed == [CloseReason.CLIENT_CLOSED]


@pytest.mark.asyncio
async def test_close_while_resubscribing_closes_new_connection(make_connector, until) -> None:
    connector = make_connector(["ok", "hold"])
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)

    connector.last.drop()
    await until(lambda: len(connector.connections) == 2 and connector.last.requests)
    pending = connector.last
    sub.close()
    await asyncio.sleep(0.05)
    pending.push("from-abandoned-connection")

    assert pending.close_calls == 1
    assert rec.messages == []
    assert rec.connection_errors == []
    assert connector.attempts == 2
    assert sub.get_subscription_id() == 1


@pytest.mark.asyncio
async def test_stale_connection_notifications_are_ignored(make_connector, until) -> None:
    connector = make_connector()
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)
    old = connector.last

    old.drop()
    await until(lambda: sub.state is SubscriptionState.CONNECTED)
    old.push("old")
    connector.last.push("new")

    assert rec.data == ["new"]


@pytest.mark.asyncio
async def test_initial_connect_failure_is_raised(make_connector) -> None:
    connector = make_connector(["refuse"])
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)

    with pytest.raises(TransportError):
        await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)

    await asyncio.sleep(0.05)
    assert rec.connection_errors == []
    assert connector.attempts == 1


@pytest.mark.asyncio
async def test_initial_subscribe_error_closes_connection(make_connector) -> None:
    connector = make_connector(["reject"])
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)

    with pytest.raises(JsonRpcError) as exc_info:
        await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)

    assert exc_info.value.rpc_code == -32601
    assert connector.last.close_calls == 1
    assert rec.connection_errors == []
    assert rec.closed == []


@pytest.mark.asyncio
async def test_drop_before_initial_reply_is_raised(make_connector, until) -> None:
    connector = make_connector(["hold"])
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)

    task = asyncio.create_task(client.subscribe(HEAD_HASH, rec.callbacks(), FAST))
    await until(lambda: connector.connections and connector.last.requests)
    connector.last.drop()

    with pytest.raises(ConnectionClosedError):
        await task

    await asyncio.sleep(0.05)
    assert connector.attempts == 1
    assert rec.connection_errors == []
    assert rec.closed == []


@pytest.mark.asyncio
async def test_drop_right_after_initial_reply_reconnects(make_connector, until) -> None:
    connector = make_connector(["hold"])
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)

    task = asyncio.create_task(client.subscribe(HEAD_HASH, rec.callbacks(), FAST))
    await until(lambda: connector.connections and connector.last.requests)
    connector.last.release()
    connector.last.drop()
    sub = await task

    await until(lambda: len(connector.connections) == 2 and sub.state is SubscriptionState.CONNECTED)
    connector.last.push("fresh")

    assert connector.attempts == 2
    assert sub.disconnects == 0
    assert sub.get_subscription_id() == 2
    assert rec.data == ["fresh"]
    assert rec.closed == []
    sub.close()


@pytest.mark.asyncio
async def test_protocol_error_goes_to_on_error_without_state_change(make_connector) -> None:
    connector = make_connector()
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)

    error = JsonRpcError(-32000, "subscription lagging")
    connector.last.push_error(error)

    assert rec.errors == [error]
    assert sub.state is SubscriptionState.CONNECTED
    assert sub.disconnects == 0


@pytest.mark.asyncio
async def test_connection_error_is_informational(make_connector) -> None:
    connector = make_connector()
    rec = Recorder()
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, rec.callbacks(), FAST)

    exc = OSError("connection reset by peer")
    connector.last.fail(exc)

    assert rec.connection_errors == [exc]
    assert sub.state is SubscriptionState.CONNECTED


@pytest.mark.asyncio
async def test_raising_callback_does_not_break_delivery(make_connector) -> None:
    connector = make_connector()
    received = []

    def on_message(payload) -> None:
        received.append(payload.data)
        if payload.data == 1:
            raise RuntimeError("handler bug")

    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(HEAD_HASH, WebSocketCallbacks(on_message=on_message))

    connector.last.push(1)
    connector.last.push(2)

    assert received == [1, 2]
    assert sub.state is SubscriptionState.CONNECTED


@pytest.mark.asyncio
async def test_replay_ignores_later_edits_to_caller_params(make_connector, until) -> None:
    connector = make_connector()
    addresses = ["NQ01"]
    request = RpcRequest("subscribeForLogsByAddressesAndTypes", (addresses, []))
    client = WebSocketClient("http://localhost:8648", connector=connector)
    sub = await client.subscribe(request, options=FAST)

    addresses.append("NQ02")
    connector.last.drop()
    await until(lambda: len(connector.connections) == 2 and sub.state is SubscriptionState.CONNECTED)

    assert connector.last.requests == [("subscribeForLogsByAddressesAndTypes", (["NQ01"], []))]
    sub.close()
