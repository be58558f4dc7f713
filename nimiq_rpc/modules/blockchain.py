"""Blockchain queries: blocks, transactions, inherents, accounts, validators, stakers."""

from __future__ import annotations

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData


class BlockchainClient:
    def __init__(self, http: HttpClient):
        self._client = http

    async def get_block_number(self, options: HttpOptions | None = None) -> RPCData:
        """Returns the block number for the current head."""
        return await self._client.call(RpcRequest("getBlockNumber"), options)

    async def get_batch_number(self, options: HttpOptions | None = None) -> RPCData:
        """Returns the batch number for the current head."""
        return await self._client.call(RpcRequest("getBatchNumber"), options)

    async def get_epoch_number(self, options: HttpOptions | None = None) -> RPCData:
        """Returns the epoch number for the current head."""
        return await self._client.call(RpcRequest("getEpochNumber"), options)

    async def get_block_by_hash(
        self,
        hash: str,
        *,
        include_body: bool | None = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Fetch a block by hash; transactions are included only with ``include_body``."""
        return await self._client.call(RpcRequest("getBlockByHash", (hash, include_body)), options)

    async def get_block_by_number(
        self,
        block_number: int,
        *,
        include_body: bool | None = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Fetch a block by number; transactions are included only with ``include_body``."""
        return await self._client.call(RpcRequest("getBlockByNumber", (block_number, include_body)), options)

    async def get_latest_block(self, *, include_body: bool = False, options: HttpOptions | None = None) -> RPCData:
        """Returns the block at the head of the main chain."""
        return await self._client.call(RpcRequest("getLatestBlock", (include_body,)), options)

    async def get_slot_at(
        self,
        block_number: int,
        *,
        offset: int | None = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """
        Returns the slot owner at the given block height and offset.

        Without an offset the offset of the existing block at that height is used.
        """
        return await self._client.call(RpcRequest("getSlotAt", (block_number, offset)), options)

    async def get_transaction_by_hash(self, hash: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getTransactionByHash", (hash,)), options)

    async def get_transactions_by_block_number(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getTransactionsByBlockNumber", (block_number,)), options)

    async def get_transactions_by_batch_number(self, batch_index: int, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getTransactionsByBatchNumber", (batch_index,)), options)

    async def get_transactions_by_address(
        self,
        address: str,
        *,
        max: int | None = None,
        start_at: str | None = None,
        just_hashes: bool = False,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """
        Latest transactions where ``address`` is sender or recipient, reward
        transactions included. The node caps ``max`` at 500 by default.
        """
        method = "getTransactionHashesByAddress" if just_hashes else "getTransactionsByAddress"
        return await self._client.call(RpcRequest(method, (address, max, start_at)), options)

    async def get_inherents_by_block_number(self, block_number: int, options: HttpOptions | None = None) -> RPCData:
        """Inherents (rewards included) of a main-chain block."""
        return await self._client.call(RpcRequest("getInherentsByBlockNumber", (block_number,)), options)

    async def get_inherents_by_batch_number(self, batch_index: int, options: HttpOptions | None = None) -> RPCData:
        """Inherents (rewards included) of a main-chain batch."""
        return await self._client.call(RpcRequest("getInherentsByBatchNumber", (batch_index,)), options)

    async def get_account_by_address(self, address: str, options: HttpOptions | None = None) -> RPCData:
        """Account at ``address``; metadata carries the blockchain state it was read at."""
        return await self._client.call(RpcRequest("getAccountByAddress", (address,)), options)

    async def get_accounts(self, options: HttpOptions | None = None) -> RPCData:
        """All accounts in the accounts tree. Expensive on the node side."""
        return await self._client.call(RpcRequest("getAccounts"), options)

    async def get_active_validators(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getActiveValidators"), options)

    async def get_current_penalized_slots(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getCurrentPenalizedSlots"), options)

    async def get_previous_penalized_slots(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getPreviousPenalizedSlots"), options)

    async def get_validator_by_address(self, address: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getValidatorByAddress", (address,)), options)

    async def get_validators(self, options: HttpOptions | None = None) -> RPCData:
        """All validators in the staking contract. Expensive on the node side."""
        return await self._client.call(RpcRequest("getValidators"), options)

    async def get_stakers_by_validator_address(self, address: str, options: HttpOptions | None = None) -> RPCData:
        """All stakers delegating to a validator. Expensive on the node side."""
        return await self._client.call(RpcRequest("getStakersByValidatorAddress", (address,)), options)

    async def get_staker_by_address(self, address: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getStakerByAddress", (address,)), options)
