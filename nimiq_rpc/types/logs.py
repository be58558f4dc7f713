"""Log kinds emitted by the node and the generic RPC result envelope."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")
M = TypeVar("M")


class LogType(str, Enum):
    """Kinds of logs attached to transactions and inherents."""
    PAY_FEE = "pay-fee"
    TRANSFER = "transfer"
    HTLC_CREATE = "htlc-create"
    HTLC_TIMEOUT_RESOLVE = "htlc-timeout-resolve"
    HTLC_REGULAR_TRANSFER = "htlc-regular-transfer"
    HTLC_EARLY_RESOLVE = "htlc-early-resolve"
    VESTING_CREATE = "vesting-create"
    CREATE_VALIDATOR = "create-validator"
    UPDATE_VALIDATOR = "update-validator"
    VALIDATOR_FEE_DEDUCTION = "validator-fee-deduction"
    DEACTIVATE_VALIDATOR = "deactivate-validator"
    REACTIVATE_VALIDATOR = "reactivate-validator"
    RETIRE_VALIDATOR = "retire-validator"
    DELETE_VALIDATOR = "delete-validator"
    CREATE_STAKER = "create-staker"
    STAKE = "stake"
    UPDATE_STAKER = "update-staker"
    SET_ACTIVE_STAKE = "set-active-stake"
    RETIRE_STAKE = "retire-stake"
    REMOVE_STAKE = "remove-stake"
    DELETE_STAKER = "delete-staker"
    STAKER_FEE_DEDUCTION = "staker-fee-deduction"
    PAYOUT_REWARD = "payout-reward"
    PENALIZE = "penalize"
    JAIL_VALIDATOR = "jail-validator"
    REVERT_CONTRACT = "revert-contract"
    FAILED_TRANSACTION = "failed-transaction"


class BlockLogType(str, Enum):
    APPLIED_BLOCK = "applied-block"
    REVERTED_BLOCK = "reverted-block"


@dataclass
class RPCData(Generic[T, M]):
    """Result of an RPC call or the payload of a notification."""
    data: T
    metadata: M | None = None

    @classmethod
    def from_result(cls, result: Any) -> "RPCData[Any, Any]":
        # The node wraps every result as {"data": ..., "metadata": ...}; bare values are kept as data.
        if isinstance(result, dict) and "data" in result:
            return cls(data=result.get("data"), metadata=result.get("metadata"))
        return cls(data=result, metadata=None)


def find_transaction_log(block_log: Any, tx_hash: str) -> dict[str, Any] | None:
    """Return the transaction log entry for ``tx_hash`` inside a block log, if present."""
    if not isinstance(block_log, dict):
        return None
    for entry in block_log.get("transactions") or []:
        if isinstance(entry, dict) and entry.get("hash") == tx_hash:
            return entry
    return None
