"""
Exception hierarchy and error classification for nimiq_rpc.

Provides:
- Custom exception classes with error codes
- Error categorization (recoverable, retryable, fatal)
- Safe error message formatting (no secrets in logs)
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RECOVERABLE = "recoverable"
    RETRYABLE = "retryable"
    FATAL = "fatal"
    VALIDATION = "validation"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"


class NimiqRpcError(Exception):
    """Base exception for all nimiq_rpc errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class JsonRpcError(NimiqRpcError):
    """Error object returned by the node (JSON-RPC `error` member)."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(
            message,
            code="JSON_RPC_ERROR",
            category=ErrorCategory.RECOVERABLE,
            details={"rpc_code": code, "data": data},
        )
        self.rpc_code = code
        self.data = data

    @classmethod
    def from_payload(cls, payload: Any) -> "JsonRpcError":
        """Build from the `error` member of a response frame; tolerates odd shapes."""
        if not isinstance(payload, dict):
            return cls(cls.INTERNAL_ERROR, str(payload or "unknown error"))
        raw_code = payload.get("code")
        try:
            code = int(raw_code)
        except (TypeError, ValueError):
            code = cls.INTERNAL_ERROR
        message = str(payload.get("message") or "").strip() or "unknown error"
        return cls(code, message, payload.get("data"))

    def __str__(self) -> str:
        return f"[{self.rpc_code}] {self.message}"


class TransportError(NimiqRpcError):
    """Network or HTTP level failure talking to the node."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "TRANSPORT_ERROR",
        status_code: int | None = None,
        retryable: bool = False,
    ):
        category = ErrorCategory.RETRYABLE if retryable else ErrorCategory.FATAL
        super().__init__(
            message,
            code=code,
            category=category,
            details={"status_code": status_code, "retryable": retryable},
        )
        self.status_code = status_code
        self.retryable = retryable


class CallTimeoutError(NimiqRpcError):
    """An RPC call did not complete within its timeout."""

    def __init__(self, method: str, timeout_ms: float):
        super().__init__(
            f"RPC call '{method}' timed out after {timeout_ms:g}ms",
            code="TIMEOUT",
            category=ErrorCategory.TIMEOUT,
            details={"method": method, "timeout_ms": timeout_ms},
        )
        self.method = method
        self.timeout_ms = timeout_ms


class ConnectionClosedError(NimiqRpcError):
    """The websocket connection went away while a request was pending."""

    def __init__(self, message: str = "connection closed", close_code: int | None = None):
        super().__init__(
            message,
            code="CONNECTION_CLOSED",
            category=ErrorCategory.RETRYABLE,
            details={"close_code": close_code},
        )
        self.close_code = close_code


class ConfigError(NimiqRpcError):
    """Invalid or unreadable configuration."""

    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(message, code="CONFIG_ERROR", category=ErrorCategory.VALIDATION, details=details)


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|passphrase|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"(https?|wss?)://[^\s:/@]+:[^\s@/]+@", re.IGNORECASE),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove credentials from error messages before they hit the logs."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: BaseException) -> tuple[str, ErrorCategory, bool]:
    """
    Classify an exception and return (error_code, category, should_retry).

    Returns:
        Tuple of (error_code, category, should_retry)
    """
    if isinstance(exc, TransportError):
        return exc.code, exc.category, exc.retryable

    if isinstance(exc, NimiqRpcError):
        return exc.code, exc.category, exc.category in (
            ErrorCategory.RETRYABLE,
            ErrorCategory.RATE_LIMIT,
            ErrorCategory.TIMEOUT,
        )

    if isinstance(exc, asyncio.TimeoutError):
        return "TIMEOUT", ErrorCategory.TIMEOUT, True

    if isinstance(exc, ConnectionError):
        return "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True

    if isinstance(exc, OSError):
        return "OS_ERROR", ErrorCategory.RETRYABLE, True

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.VALIDATION, False

    if isinstance(exc, (ValueError, TypeError, KeyError)):
        return "INVALID_VALUE", ErrorCategory.VALIDATION, False

    exc_str = str(exc).lower()
    if "rate limit" in exc_str or "429" in exc_str:
        return "RATE_LIMIT", ErrorCategory.RATE_LIMIT, True
    if "timeout" in exc_str or "timed out" in exc_str:
        return "TIMEOUT", ErrorCategory.TIMEOUT, True
    if "connection" in exc_str or "network" in exc_str:
        return "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True

    return "INTERNAL_ERROR", ErrorCategory.FATAL, False
