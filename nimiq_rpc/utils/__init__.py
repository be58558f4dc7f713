"""Utility functions for nimiq_rpc."""

from nimiq_rpc.utils.exceptions import (
    ErrorCategory,
    NimiqRpcError,
    classify_exception,
    sanitize_error_message,
)

__all__ = ["ErrorCategory", "NimiqRpcError", "classify_exception", "sanitize_error_message"]
