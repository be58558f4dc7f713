import json

import httpx
import pytest

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.utils.exceptions import CallTimeoutError, JsonRpcError, TransportError


def _client(handler, **kwargs) -> HttpClient:
    return HttpClient("http://localhost:8648", transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_call_posts_json_rpc_and_unwraps_result() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = json.loads(request.content)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": {"data": 42, "metadata": None}})

    async with _client(handler, headers={"Authorization": "Bearer t"}) as client:
        result = await client.call(RpcRequest("getBlockNumber"))

    assert result.data == 42
    assert result.metadata is None
    body = json.loads(seen[0].content)
    assert body["method"] == "getBlockNumber"
    assert body["params"] == []
    assert body["jsonrpc"] == "2.0"
    assert seen[0].headers["Authorization"] == "Bearer t"
    assert seen[0].headers["Content-Type"] == "application/json"
    assert (seen[0].url.host, seen[0].url.port) == ("localhost", 8648)


@pytest.mark.asyncio
async def test_call_keeps_metadata() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        result = {"data": {"balance": 10}, "metadata": {"blockNumber": 5, "blockHash": "h"}}
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})

    async with _client(handler) as client:
        result = await client.call(RpcRequest("getAccountByAddress", ("NQ07",)))

    assert result.data == {"balance": 10}
    assert result.metadata == {"blockNumber": 5, "blockHash": "h"}


@pytest.mark.asyncio
async def test_json_rpc_error_is_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "Invalid params"}})

    async with _client(handler) as client:
        with pytest.raises(JsonRpcError) as exc_info:
            await client.call(RpcRequest("getBlockByNumber", ("x",)))

    assert exc_info.value.rpc_code == -32602
    assert exc_info.value.code == "JSON_RPC_ERROR"


@pytest.mark.asyncio
@pytest.mark.parametrize(("status", "retryable"), [(500, True), (503, True), (429, True), (401, False), (404, False)])
async def test_http_status_errors(status: int, retryable: bool) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"message": "nope"})

    async with _client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.call(RpcRequest("getBlockNumber"))

    assert exc_info.value.status_code == status
    assert exc_info.value.retryable is retryable
    assert exc_info.value.code == "HTTP_ERROR"
    assert "nope" in exc_info.value.message


@pytest.mark.asyncio
async def test_network_error_is_retryable_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.call(RpcRequest("getBlockNumber"))

    assert exc_info.value.code == "NETWORK_ERROR"
    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_timeout_becomes_call_timeout_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async with _client(handler) as client:
        with pytest.raises(CallTimeoutError) as exc_info:
            await client.call(RpcRequest("getBlockNumber"), HttpOptions(timeout_ms=250))

    assert exc_info.value.timeout_ms == 250
    assert "getBlockNumber" in str(exc_info.value)


@pytest.mark.asyncio
async def test_non_json_body_is_bad_response() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy</html>")

    async with _client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.call(RpcRequest("getBlockNumber"))

    assert exc_info.value.code == "BAD_RESPONSE"
