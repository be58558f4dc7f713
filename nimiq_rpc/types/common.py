"""Shared enums, request descriptors and block discriminators.

Domain objects (blocks, transactions, accounts) travel as decoded JSON dicts;
only the pieces the client itself needs to reason about are typed here.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, Union

FilterStreamFn = Callable[[Any], bool]


class HashAlgorithm(IntEnum):
    BLAKE2B = 1
    SHA256 = 3
    SHA512 = 4


class AccountType(str, Enum):
    BASIC = "basic"
    VESTING = "vesting"
    HTLC = "htlc"
    STAKING = "staking"


class InherentType(str, Enum):
    REWARD = "reward"
    JAIL = "jail"
    PENALIZE = "penalize"


class BlockType(str, Enum):
    MICRO = "micro"
    MACRO = "macro"


class BlockSubscriptionType(str, Enum):
    MACRO = "macro"
    MICRO = "micro"
    ELECTION = "election"


class RetrieveType(str, Enum):
    FULL = "full"
    PARTIAL = "partial"
    HASH = "hash"


class NetworkId(IntEnum):
    TEST = 1
    DEV = 2
    BOUNTY = 3
    DUMMY = 4
    MAIN = 42
    TEST_ALBATROSS = 5
    DEV_ALBATROSS = 6
    UNIT_ALBATROSS = 7
    MAIN_ALBATROSS = 24


@dataclass(frozen=True)
class RpcRequest:
    """Immutable `(method, params)` descriptor sent to the node."""
    method: str
    params: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        # Stored params are a private deep copy; later edits to caller lists do not leak in.
        object.__setattr__(self, "params", tuple(copy.deepcopy(list(self.params))))

    def to_payload(self, request_id: int) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": self.method,
            "params": list(self.params),
        }


@dataclass(frozen=True)
class RelativeValidityStartHeight:
    blocks: int

    def render(self) -> str:
        return f"+{self.blocks}"


@dataclass(frozen=True)
class AbsoluteValidityStartHeight:
    block_number: int

    def render(self) -> str:
        return str(self.block_number)


ValidityStartHeight = Union[RelativeValidityStartHeight, AbsoluteValidityStartHeight]


def render_validity_start_height(value: ValidityStartHeight | int | None) -> str:
    """Render the validity start height the way the node expects ("+N" or "N")."""
    if value is None:
        return "+0"
    if isinstance(value, int):
        return str(value)
    return value.render()


def get_block_type(block: Any) -> BlockSubscriptionType:
    """Classify a head-block payload as micro, macro or election."""
    if not isinstance(block, dict):
        raise ValueError("Block is undefined")
    if block.get("type") == BlockType.MICRO.value or "isElectionBlock" not in block:
        return BlockSubscriptionType.MICRO
    if block.get("isElectionBlock"):
        return BlockSubscriptionType.ELECTION
    return BlockSubscriptionType.MACRO


def is_micro(block: Any) -> bool:
    return get_block_type(block) is BlockSubscriptionType.MICRO


def is_macro(block: Any) -> bool:
    return get_block_type(block) is BlockSubscriptionType.MACRO


def is_election(block: Any) -> bool:
    return get_block_type(block) is BlockSubscriptionType.ELECTION


BLOCK_FILTERS: dict[BlockSubscriptionType, FilterStreamFn] = {
    BlockSubscriptionType.MICRO: is_micro,
    BlockSubscriptionType.MACRO: is_macro,
    BlockSubscriptionType.ELECTION: is_election,
}
