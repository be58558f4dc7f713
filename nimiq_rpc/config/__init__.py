"""Configuration module for nimiq_rpc."""

from nimiq_rpc.config.loader import get_config_path, load_config, save_config
from nimiq_rpc.config.schema import (
    DEFAULT_CLIENT_OPTIONS,
    DEFAULT_OPTIONS,
    DEFAULT_OPTIONS_SEND_TX,
    Config,
    HttpOptions,
    SendTxCallOptions,
    WebSocketClientOptions,
)

__all__ = [
    "DEFAULT_CLIENT_OPTIONS",
    "DEFAULT_OPTIONS",
    "DEFAULT_OPTIONS_SEND_TX",
    "Config",
    "HttpOptions",
    "SendTxCallOptions",
    "WebSocketClientOptions",
    "get_config_path",
    "load_config",
    "save_config",
]
