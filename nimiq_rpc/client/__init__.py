"""Node client: HTTP calls, websocket subscriptions and the namespace facade."""

from __future__ import annotations

from typing import Any

import httpx

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.client.transport import Connection, WebSocketConnection
from nimiq_rpc.client.web_socket import (
    CloseReason,
    Connector,
    Subscription,
    SubscriptionState,
    WebSocketCallbacks,
    WebSocketClient,
    derive_ws_url,
)
from nimiq_rpc.config.schema import HttpOptions, WebSocketClientOptions
from nimiq_rpc.modules import (
    BlockchainClient,
    BlockchainStream,
    ConsensusClient,
    MempoolClient,
    NetworkClient,
    PolicyClient,
    SerdeHelper,
    ValidatorClient,
    WalletClient,
    ZkpComponentClient,
)
from nimiq_rpc.types.common import FilterStreamFn, RpcRequest
from nimiq_rpc.types.logs import RPCData


class NimiqRPCClient:
    """
    One node, both transports.

    ``http`` serves request/response calls and ``ws`` opens subscriptions;
    each namespace of the node API hangs off the client as an attribute.
    """

    def __init__(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
        connector: Connector | None = None,
    ):
        self.url = url
        self.http = HttpClient(url, headers=headers, transport=http_transport)
        self.ws = WebSocketClient(url, connector=connector)

        self.blockchain = BlockchainClient(self.http)
        self.blockchain_streams = BlockchainStream(self.ws)
        self.consensus = ConsensusClient(self.http, self.ws)
        self.mempool = MempoolClient(self.http)
        self.network = NetworkClient(self.http)
        self.policy = PolicyClient(self.http)
        self.validator = ValidatorClient(self.http)
        self.wallet = WalletClient(self.http)
        self.zkp_component = ZkpComponentClient(self.http)
        self.serde_helper = SerdeHelper(self.http)

    async def __aenter__(self) -> "NimiqRPCClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP pool. Open subscriptions are owned by their handles."""
        await self.http.aclose()

    async def call(self, request: RpcRequest, options: HttpOptions | None = None) -> RPCData:
        """Raw HTTP call for methods without a dedicated wrapper."""
        return await self.http.call(request, options)

    async def subscribe(
        self,
        request: RpcRequest,
        callbacks: WebSocketCallbacks | None = None,
        options: WebSocketClientOptions | None = None,
        filter: FilterStreamFn | None = None,
    ) -> Subscription:
        return await self.ws.subscribe(request, callbacks, options, filter)


__all__ = [
    "CloseReason",
    "Connection",
    "Connector",
    "HttpClient",
    "NimiqRPCClient",
    "Subscription",
    "SubscriptionState",
    "WebSocketCallbacks",
    "WebSocketClient",
    "WebSocketConnection",
    "derive_ws_url",
]
