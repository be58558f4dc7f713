"""
nimiq_rpc - async JSON-RPC client for Nimiq Albatross nodes.
"""

__version__ = "0.1.0"

from nimiq_rpc.client import (
    CloseReason,
    HttpClient,
    NimiqRPCClient,
    Subscription,
    SubscriptionState,
    WebSocketCallbacks,
    WebSocketClient,
)
from nimiq_rpc.config.schema import HttpOptions, SendTxCallOptions, WebSocketClientOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData
from nimiq_rpc.utils.exceptions import (
    CallTimeoutError,
    ConnectionClosedError,
    JsonRpcError,
    NimiqRpcError,
    TransportError,
)


def create_client(url: str, **kwargs) -> NimiqRPCClient:
    """Build a client for ``url``. Every call returns a new, independent client."""
    return NimiqRPCClient(url, **kwargs)


__all__ = [
    "CallTimeoutError",
    "CloseReason",
    "ConnectionClosedError",
    "HttpClient",
    "HttpOptions",
    "JsonRpcError",
    "NimiqRPCClient",
    "NimiqRpcError",
    "RPCData",
    "RpcRequest",
    "SendTxCallOptions",
    "Subscription",
    "SubscriptionState",
    "TransportError",
    "WebSocketCallbacks",
    "WebSocketClient",
    "WebSocketClientOptions",
    "__version__",
    "create_client",
]
