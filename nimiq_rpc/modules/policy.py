"""Protocol policy constants and block-number arithmetic."""

from __future__ import annotations

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData


class PolicyClient:
    """
    Wraps the node's policy namespace.

    All of these are pure functions of the protocol constants, so results
    can be cached for the lifetime of a network.
    """

    def __init__(self, http: HttpClient):
        self._client = http

    async def _at(self, method: str, number: int, options: HttpOptions | None) -> RPCData:
        return await self._client.call(RpcRequest(method, (number,)), options)

    async def get_policy_constants(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getPolicyConstants"), options)

    async def get_epoch_at(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        """Epoch number at ``block_number``."""
        return await self._at("getEpochAt", block_number, options)

    async def get_epoch_index_at(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        """Index of ``block_number`` inside its epoch."""
        return await self._at("getEpochIndexAt", block_number, options)

    async def get_batch_at(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getBatchAt", block_number, options)

    async def get_batch_index_at(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getBatchIndexAt", block_number, options)

    async def get_election_block_after(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getElectionBlockAfter", block_number, options)

    async def get_election_block_before(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getElectionBlockBefore", block_number, options)

    async def get_last_election_block(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        """Last election block at or before ``block_number``."""
        return await self._at("getLastElectionBlock", block_number, options)

    async def is_election_block_at(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("isElectionBlockAt", block_number, options)

    async def get_macro_block_after(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getMacroBlockAfter", block_number, options)

    async def get_macro_block_before(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getMacroBlockBefore", block_number, options)

    async def get_last_macro_block(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        """Last macro block at or before ``block_number``."""
        return await self._at("getLastMacroBlock", block_number, options)

    async def is_macro_block_at(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("isMacroBlockAt", block_number, options)

    async def is_micro_block_at(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("isMicroBlockAt", block_number, options)

    async def get_first_block_of(self, epoch: int, options: HttpOptions | None = None) -> RPCData:
        """First block of epoch ``epoch``."""
        return await self._at("getFirstBlockOf", epoch, options)

    async def get_block_after_reporting_window(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getBlockAfterReportingWindow", block_number, options)

    async def get_block_after_jail(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getBlockAfterJail", block_number, options)

    async def get_first_block_of_batch(self, batch: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getFirstBlockOfBatch", batch, options)

    async def get_election_block_of(self, epoch: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getElectionBlockOf", epoch, options)

    async def get_macro_block_of(self, batch: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getMacroBlockOf", batch, options)

    async def get_first_batch_of_epoch(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._at("getFirstBatchOfEpoch", block_number, options)

    async def get_supply_at(
        self,
        *,
        genesis_supply: int,
        genesis_time: int,
        current_time: int,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Total coin supply at ``current_time`` given the genesis supply and timestamp."""
        request = RpcRequest("getSupplyAt", (genesis_supply, genesis_time, current_time))
        return await self._client.call(request, options)
