"""Mempool inspection and raw transaction submission."""

from __future__ import annotations

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData


class MempoolClient:
    def __init__(self, http: HttpClient):
        self._client = http

    async def push_transaction(
        self,
        transaction: str,
        *,
        high_priority: bool = False,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Push a serialized transaction into the mempool; returns its hash."""
        method = "pushHighPriorityTransaction" if high_priority else "pushTransaction"
        return await self._client.call(RpcRequest(method, (transaction,)), options)

    async def mempool_content(
        self,
        *,
        include_transactions: bool = False,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Transaction hashes in the mempool, or full transactions with ``include_transactions``."""
        return await self._client.call(RpcRequest("mempoolContent", (include_transactions,)), options)

    async def mempool(self, options: HttpOptions | None = None) -> RPCData:
        """Mempool size and fee-bucket histogram."""
        return await self._client.call(RpcRequest("mempool"), options)

    async def get_min_fee_per_byte(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getMinFeePerByte"), options)

    async def get_transaction_from_mempool(self, hash: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getTransactionFromMempool", (hash,)), options)
