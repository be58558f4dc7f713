"""Websocket streams of head blocks, validator elections and logs."""

from __future__ import annotations

from typing import Iterable

from nimiq_rpc.client.web_socket import Subscription, WebSocketCallbacks, WebSocketClient
from nimiq_rpc.config.schema import WebSocketClientOptions
from nimiq_rpc.types.common import (
    BLOCK_FILTERS,
    BlockSubscriptionType,
    FilterStreamFn,
    RetrieveType,
    RpcRequest,
)
from nimiq_rpc.types.logs import LogType


def _head_block_request(retrieve: RetrieveType) -> RpcRequest:
    return RpcRequest("subscribeForHeadBlock", (retrieve is RetrieveType.FULL,))


class BlockchainStream:
    def __init__(self, ws: WebSocketClient):
        self.ws = ws

    async def subscribe_for_block_hashes(
        self,
        callbacks: WebSocketCallbacks | None = None,
        options: WebSocketClientOptions | None = None,
        filter: FilterStreamFn | None = None,
    ) -> Subscription:
        """Stream the hash of every new head block."""
        return await self.ws.subscribe(RpcRequest("subscribeForHeadBlockHash"), callbacks, options, filter)

    async def subscribe_for_blocks(
        self,
        callbacks: WebSocketCallbacks | None = None,
        *,
        retrieve: RetrieveType = RetrieveType.FULL,
        kind: BlockSubscriptionType | None = None,
        options: WebSocketClientOptions | None = None,
    ) -> Subscription:
        """
        Stream new head blocks.

        ``kind`` restricts delivery to micro, macro or election blocks; the
        node sends every block and the filter drops the others client side.
        """
        block_filter = BLOCK_FILTERS[kind] if kind is not None else None
        return await self.ws.subscribe(_head_block_request(retrieve), callbacks, options, block_filter)

    async def subscribe_for_micro_blocks(
        self,
        callbacks: WebSocketCallbacks | None = None,
        *,
        retrieve: RetrieveType = RetrieveType.FULL,
        options: WebSocketClientOptions | None = None,
    ) -> Subscription:
        return await self.subscribe_for_blocks(
            callbacks, retrieve=retrieve, kind=BlockSubscriptionType.MICRO, options=options
        )

    async def subscribe_for_macro_blocks(
        self,
        callbacks: WebSocketCallbacks | None = None,
        *,
        retrieve: RetrieveType = RetrieveType.FULL,
        options: WebSocketClientOptions | None = None,
    ) -> Subscription:
        return await self.subscribe_for_blocks(
            callbacks, retrieve=retrieve, kind=BlockSubscriptionType.MACRO, options=options
        )

    async def subscribe_for_election_blocks(
        self,
        callbacks: WebSocketCallbacks | None = None,
        *,
        retrieve: RetrieveType = RetrieveType.FULL,
        options: WebSocketClientOptions | None = None,
    ) -> Subscription:
        return await self.subscribe_for_blocks(
            callbacks, retrieve=retrieve, kind=BlockSubscriptionType.ELECTION, options=options
        )

    async def subscribe_for_validator_election_by_address(
        self,
        address: str,
        callbacks: WebSocketCallbacks | None = None,
        options: WebSocketClientOptions | None = None,
    ) -> Subscription:
        """Stream pre-epoch validator updates for ``address``."""
        request = RpcRequest("subscribeForValidatorElectionByAddress", (address,))
        return await self.ws.subscribe(request, callbacks, options)

    async def subscribe_for_logs_by_addresses_and_types(
        self,
        callbacks: WebSocketCallbacks | None = None,
        *,
        addresses: Iterable[str] = (),
        types: Iterable[LogType | str] = (),
        options: WebSocketClientOptions | None = None,
        filter: FilterStreamFn | None = None,
    ) -> Subscription:
        """Stream block logs touching any of ``addresses``; empty lists mean everything."""
        log_types = [t.value if isinstance(t, LogType) else str(t) for t in types]
        request = RpcRequest("subscribeForLogsByAddressesAndTypes", (list(addresses), log_types))
        return await self.ws.subscribe(request, callbacks, options, filter)
