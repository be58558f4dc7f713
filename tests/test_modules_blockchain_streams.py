from __future__ import annotations

import pytest

from nimiq_rpc.client.web_socket import WebSocketCallbacks, WebSocketClient
from nimiq_rpc.modules.blockchain_streams import BlockchainStream
from nimiq_rpc.types.common import BlockSubscriptionType, RetrieveType, get_block_type
from nimiq_rpc.types.logs import LogType

MICRO = {"number": 1, "type": "micro"}
MACRO = {"number": 2, "type": "macro", "isElectionBlock": False}
ELECTION = {"number": 3, "type": "macro", "isElectionBlock": True}


def test_block_type_discriminator() -> None:
    assert get_block_type(MICRO) is BlockSubscriptionType.MICRO
    assert get_block_type(MACRO) is BlockSubscriptionType.MACRO
    assert get_block_type(ELECTION) is BlockSubscriptionType.ELECTION
    assert get_block_type({"number": 4}) is BlockSubscriptionType.MICRO
    with pytest.raises(ValueError):
        get_block_type(None)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (None, [1, 2, 3]),
        (BlockSubscriptionType.MICRO, [1]),
        (BlockSubscriptionType.MACRO, [2]),
        (BlockSubscriptionType.ELECTION, [3]),
    ],
)
async def test_block_stream_filters_by_kind(make_connector, kind, expected) -> None:
    connector = make_connector()
    stream = BlockchainStream(WebSocketClient("http://localhost:8648", connector=connector))
    received = []

    await stream.subscribe_for_blocks(WebSocketCallbacks(on_message=received.append), kind=kind)
    for block in (MICRO, MACRO, ELECTION):
        connector.last.push(block)

    assert [payload.data["number"] for payload in received] == expected
    assert connector.last.requests == [("subscribeForHeadBlock", (True,))]


@pytest.mark.asyncio
async def test_partial_blocks_and_election_wrapper(make_connector) -> None:
    connector = make_connector()
    stream = BlockchainStream(WebSocketClient("http://localhost:8648", connector=connector))
    received = []

    await stream.subscribe_for_election_blocks(
        WebSocketCallbacks(on_message=received.append), retrieve=RetrieveType.PARTIAL
    )
    connector.last.push(MICRO)
    connector.last.push(ELECTION)

    assert connector.last.requests == [("subscribeForHeadBlock", (False,))]
    assert [payload.data for payload in received] == [ELECTION]


@pytest.mark.asyncio
async def test_hash_election_and_log_requests(make_connector) -> None:
    connector = make_connector()
    stream = BlockchainStream(WebSocketClient("http://localhost:8648", connector=connector))

    await stream.subscribe_for_block_hashes()
    assert connector.last.requests == [("subscribeForHeadBlockHash", ())]

    await stream.subscribe_for_validator_election_by_address("NQ07")
    assert connector.last.requests == [("subscribeForValidatorElectionByAddress", ("NQ07",))]

    await stream.subscribe_for_logs_by_addresses_and_types(
        addresses=["NQ07"], types=[LogType.TRANSFER, "stake"]
    )
    assert connector.last.requests == [("subscribeForLogsByAddressesAndTypes", (["NQ07"], ["transfer", "stake"]))]
    assert len(connector.connections) == 3
