"""Typed request descriptors, enums and result envelopes."""

from nimiq_rpc.types.common import (
    BLOCK_FILTERS,
    AbsoluteValidityStartHeight,
    AccountType,
    BlockSubscriptionType,
    BlockType,
    FilterStreamFn,
    HashAlgorithm,
    InherentType,
    NetworkId,
    RelativeValidityStartHeight,
    RetrieveType,
    RpcRequest,
    ValidityStartHeight,
    get_block_type,
    is_election,
    is_macro,
    is_micro,
    render_validity_start_height,
)
from nimiq_rpc.types.logs import BlockLogType, LogType, RPCData, find_transaction_log

__all__ = [
    "BLOCK_FILTERS",
    "AbsoluteValidityStartHeight",
    "AccountType",
    "BlockLogType",
    "BlockSubscriptionType",
    "BlockType",
    "FilterStreamFn",
    "HashAlgorithm",
    "InherentType",
    "LogType",
    "NetworkId",
    "RPCData",
    "RelativeValidityStartHeight",
    "RetrieveType",
    "RpcRequest",
    "ValidityStartHeight",
    "find_transaction_log",
    "get_block_type",
    "is_election",
    "is_macro",
    "is_micro",
    "render_validity_start_height",
]
