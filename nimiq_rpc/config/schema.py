"""Configuration schema using Pydantic.

Call options are immutable models handed to each request or subscription;
`Config` is the persisted root, stored at ~/.nimiq_rpc/config.json.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_NODE_URL = "http://localhost:8648"


class HttpOptions(BaseModel):
    """Options for a single HTTP JSON-RPC call."""
    model_config = ConfigDict(frozen=True)

    timeout_ms: float = Field(default=10_000, gt=0)  # per-call timeout


class SendTxCallOptions(HttpOptions):
    """Options for send-and-wait transaction calls."""
    wait_for_confirmation_timeout_ms: float = Field(default=10_000, gt=0)


class WebSocketClientOptions(BaseModel):
    """Options for one websocket subscription; fixed for its whole lifetime."""
    model_config = ConfigDict(frozen=True)

    call_timeout_ms: float = Field(default=30_000, gt=0)  # subscribe call timeout
    reconnect_delay_ms: float = Field(default=3_000, ge=0)  # fixed delay between attempts
    max_reconnect_attempts: int = Field(default=5, ge=0)  # consecutive failed attempts before giving up


DEFAULT_OPTIONS = HttpOptions()
DEFAULT_OPTIONS_SEND_TX = SendTxCallOptions()
DEFAULT_CLIENT_OPTIONS = WebSocketClientOptions()


class Config(BaseSettings):
    """Root configuration for nimiq_rpc."""
    url: str = DEFAULT_NODE_URL  # HTTP endpoint; the websocket endpoint is derived from it
    headers: dict[str, str] = Field(default_factory=dict)  # extra HTTP headers (e.g. a reverse proxy token)
    http: HttpOptions = Field(default_factory=HttpOptions)
    ws: WebSocketClientOptions = Field(default_factory=WebSocketClientOptions)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="NIMIQ_RPC_",
        env_nested_delimiter="__",
    )
