from __future__ import annotations

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData


class ZkpComponentClient:
    def __init__(self, http: HttpClient):
        self._client = http

    async def get_zkp_state(self, options: HttpOptions | None = None) -> RPCData:
        """Latest zero-knowledge proof state: header hash, block number and proof."""
        return await self._client.call(RpcRequest("getZkpState"), options)
