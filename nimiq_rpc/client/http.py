"""HTTP JSON-RPC client for the node."""

from __future__ import annotations

import itertools
from typing import Any

import httpx
from loguru import logger

from nimiq_rpc.config.schema import DEFAULT_OPTIONS, HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData
from nimiq_rpc.utils.exceptions import CallTimeoutError, JsonRpcError, TransportError, sanitize_error_message


class HttpClient:
    """Makes request/response calls against the node's HTTP endpoint."""

    def __init__(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._ids = itertools.count(1)
        self._client = httpx.AsyncClient(
            headers={**(headers or {}), "Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def call(self, request: RpcRequest, options: HttpOptions | None = None) -> RPCData:
        """
        Make a raw call to the node.

        Returns the result envelope (data plus optional metadata). JSON-RPC
        errors raise `JsonRpcError`; network and HTTP failures raise
        `TransportError`.
        """
        options = options or DEFAULT_OPTIONS
        body = request.to_payload(next(self._ids))
        logger.debug(f"HTTP call {request.method} params={list(request.params)!r}")
        try:
            resp = await self._client.post(self.url, json=body, timeout=options.timeout_ms / 1000)
        except httpx.TimeoutException as exc:
            raise CallTimeoutError(request.method, options.timeout_ms) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                f"node network error: {request.method}: {sanitize_error_message(str(exc))}",
                code="NETWORK_ERROR",
                retryable=True,
            ) from exc

        status_code = resp.status_code
        if status_code >= 400:
            raise TransportError(
                f"node http error {status_code}: {self._extract_error_message(resp)}",
                code="HTTP_ERROR",
                status_code=status_code,
                retryable=self._is_retryable_status(status_code),
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise TransportError(
                f"node bad response: non-json body for {request.method}",
                code="BAD_RESPONSE",
                status_code=status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise TransportError(
                f"node bad response: unexpected body for {request.method}",
                code="BAD_RESPONSE",
                status_code=status_code,
            )
        if payload.get("error") is not None:
            raise JsonRpcError.from_payload(payload["error"])
        return RPCData.from_result(payload.get("result"))

    @staticmethod
    def _is_retryable_status(status_code: int) -> bool:
        return status_code >= 500 or status_code in {408, 425, 429}

    @staticmethod
    def _extract_error_message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            err = body.get("error")
            if isinstance(err, dict):
                msg = err.get("message")
                if isinstance(msg, str) and msg.strip():
                    return msg.strip()
            for key in ("message", "detail", "error"):
                val = body.get(key)
                if isinstance(val, str) and val.strip():
                    return val.strip()
        text = (resp.text or "").strip()
        if text:
            return text[:200]
        return "request failed"
