"""Peer-to-peer network status of the node."""

from __future__ import annotations

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData


class NetworkClient:
    def __init__(self, http: HttpClient):
        self._client = http

    async def get_peer_id(self, options: HttpOptions | None = None) -> RPCData:
        """The node's own peer id."""
        return await self._client.call(RpcRequest("getPeerId"), options)

    async def get_peer_count(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getPeerCount"), options)

    async def get_peer_list(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getPeerList"), options)
