"""Node-side serialization helpers."""

from __future__ import annotations

from typing import Iterable

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData


class SerdeHelper:
    def __init__(self, http: HttpClient):
        self._client = http

    async def serialize_to_hex(self, data: bytes | Iterable[int], options: HttpOptions | None = None) -> RPCData:
        """Hex string of ``data``; the node takes the bytes as a list of integers."""
        return await self._client.call(RpcRequest("serializeToHex", (list(bytes(data)),)), options)

    async def deserialize_from_hex(self, hex_string: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("deserializeFromHex", (hex_string,)), options)
