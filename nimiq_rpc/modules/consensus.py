"""Consensus: transaction creation and submission.

Every transaction kind comes as a triple: ``create_*`` returns the serialized
transaction, ``send_*`` submits it and returns its hash, and ``send_sync_*``
submits it and waits for it to show up in a block log.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Iterable

from loguru import logger

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.client.web_socket import WebSocketCallbacks, WebSocketClient
from nimiq_rpc.config.schema import DEFAULT_OPTIONS_SEND_TX, HttpOptions, SendTxCallOptions
from nimiq_rpc.types.common import RpcRequest, ValidityStartHeight, render_validity_start_height
from nimiq_rpc.types.logs import RPCData, find_transaction_log

VSH = ValidityStartHeight | int | None


@dataclass
class TxLog:
    """Outcome of a send-and-wait call; ``log`` is None when no block log arrived in time."""
    hash: str
    log: dict[str, Any] | None = None
    metadata: Any = None

    @property
    def confirmed(self) -> bool:
        return self.log is not None


class _ConfirmationWatcher:
    """Collects block logs until the awaited transaction hash is known and seen."""

    def __init__(self) -> None:
        self.tx_hash: str | None = None
        self._backlog: list[RPCData] = []
        self._result: asyncio.Future = asyncio.get_running_loop().create_future()

    def on_message(self, payload: RPCData) -> None:
        if self._result.done():
            return
        if self.tx_hash is None:
            self._backlog.append(payload)
            return
        self._check(payload)

    def expect(self, tx_hash: str) -> None:
        self.tx_hash = tx_hash
        backlog, self._backlog = self._backlog, []
        for payload in backlog:
            self._check(payload)

    def _check(self, payload: RPCData) -> None:
        entry = find_transaction_log(payload.data, self.tx_hash or "")
        if entry is not None and not self._result.done():
            self._result.set_result(TxLog(hash=self.tx_hash or "", log=entry, metadata=payload.metadata))

    async def wait(self, timeout: float) -> TxLog | None:
        try:
            return await asyncio.wait_for(asyncio.shield(self._result), timeout)
        except asyncio.TimeoutError:
            return None


class ConsensusClient:
    def __init__(self, http: HttpClient, ws: WebSocketClient | None = None):
        self._client = http
        self._ws = ws

    async def _send_and_wait(
        self,
        request: RpcRequest,
        addresses: Iterable[str],
        options: SendTxCallOptions | None,
    ) -> TxLog:
        options = options or DEFAULT_OPTIONS_SEND_TX
        if self._ws is None:
            result = await self._client.call(request, options)
            return TxLog(hash=str(result.data))

        watcher = _ConfirmationWatcher()
        # Subscribe before sending so a fast inclusion is not missed.
        subscription = await self._ws.subscribe(
            RpcRequest("subscribeForLogsByAddressesAndTypes", ([a for a in addresses if a], [])),
            WebSocketCallbacks(on_message=watcher.on_message),
        )
        try:
            result = await self._client.call(request, options)
            tx_hash = str(result.data)
            watcher.expect(tx_hash)
            confirmed = await watcher.wait(options.wait_for_confirmation_timeout_ms / 1000)
        finally:
            subscription.close()
        if confirmed is None:
            logger.warning(
                f"Transaction {tx_hash} not confirmed within {options.wait_for_confirmation_timeout_ms:g}ms"
            )
            return TxLog(hash=tx_hash)
        return confirmed

    async def is_consensus_established(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("isConsensusEstablished"), options)

    async def get_raw_transaction_info(self, raw_transaction: str, options: HttpOptions | None = None) -> RPCData:
        """Decode a serialized transaction."""
        return await self._client.call(RpcRequest("getRawTransactionInfo", (raw_transaction,)), options)

    async def send_raw_transaction(self, raw_transaction: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("sendRawTransaction", (raw_transaction,)), options)

    # Basic transactions

    @staticmethod
    def _basic_request(prefix: str, wallet, recipient, value, fee, data, vsh) -> RpcRequest:
        height = render_validity_start_height(vsh)
        if data:
            return RpcRequest(f"{prefix}BasicTransactionWithData", (wallet, recipient, data, value, fee, height))
        return RpcRequest(f"{prefix}BasicTransaction", (wallet, recipient, value, fee, height))

    async def create_transaction(
        self,
        *,
        wallet: str,
        recipient: str,
        value: int,
        fee: int,
        data: str | None = None,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """
        Create a serialized basic transaction.

        With ``data`` the transaction carries it as recipient data.
        """
        request = self._basic_request("create", wallet, recipient, value, fee, data, validity_start_height)
        return await self._client.call(request, options)

    async def send_transaction(
        self,
        *,
        wallet: str,
        recipient: str,
        value: int,
        fee: int,
        data: str | None = None,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        request = self._basic_request("send", wallet, recipient, value, fee, data, validity_start_height)
        return await self._client.call(request, options)

    async def send_sync_transaction(
        self,
        *,
        wallet: str,
        recipient: str,
        value: int,
        fee: int,
        data: str | None = None,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        request = self._basic_request("send", wallet, recipient, value, fee, data, validity_start_height)
        return await self._send_and_wait(request, (wallet, recipient), options)

    # Vesting contracts

    @staticmethod
    def _new_vesting_params(wallet, owner, start_time, time_step, num_steps, value, fee, vsh) -> tuple:
        return (wallet, owner, start_time, time_step, num_steps, value, fee, render_validity_start_height(vsh))

    async def create_new_vesting_transaction(
        self,
        *,
        wallet: str,
        owner: str,
        start_time: int,
        time_step: int,
        num_steps: int,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Serialized transaction creating a vesting contract owned by ``owner``."""
        params = self._new_vesting_params(
            wallet, owner, start_time, time_step, num_steps, value, fee, validity_start_height
        )
        return await self._client.call(RpcRequest("createNewVestingTransaction", params), options)

    async def send_new_vesting_transaction(
        self,
        *,
        wallet: str,
        owner: str,
        start_time: int,
        time_step: int,
        num_steps: int,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._new_vesting_params(
            wallet, owner, start_time, time_step, num_steps, value, fee, validity_start_height
        )
        return await self._client.call(RpcRequest("sendNewVestingTransaction", params), options)

    async def send_sync_new_vesting_transaction(
        self,
        *,
        wallet: str,
        owner: str,
        start_time: int,
        time_step: int,
        num_steps: int,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = self._new_vesting_params(
            wallet, owner, start_time, time_step, num_steps, value, fee, validity_start_height
        )
        return await self._send_and_wait(RpcRequest("sendNewVestingTransaction", params), (wallet, owner), options)

    async def create_redeem_vesting_transaction(
        self,
        *,
        wallet: str,
        contract_address: str,
        recipient: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (wallet, contract_address, recipient, value, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("createRedeemVestingTransaction", params), options)

    async def send_redeem_vesting_transaction(
        self,
        *,
        wallet: str,
        contract_address: str,
        recipient: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (wallet, contract_address, recipient, value, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("sendRedeemVestingTransaction", params), options)

    async def send_sync_redeem_vesting_transaction(
        self,
        *,
        wallet: str,
        contract_address: str,
        recipient: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (wallet, contract_address, recipient, value, fee, render_validity_start_height(validity_start_height))
        return await self._send_and_wait(
            RpcRequest("sendRedeemVestingTransaction", params), (contract_address, recipient), options
        )

    # HTLC contracts

    @staticmethod
    def _new_htlc_params(wallet, htlc_sender, htlc_recipient, hash_root, hash_count, timeout, value, fee, vsh):
        return (
            wallet, htlc_sender, htlc_recipient, hash_root, hash_count, timeout, value, fee,
            render_validity_start_height(vsh),
        )

    async def create_new_htlc_transaction(
        self,
        *,
        wallet: str,
        htlc_sender: str,
        htlc_recipient: str,
        hash_root: str,
        hash_count: int,
        timeout: int,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._new_htlc_params(
            wallet, htlc_sender, htlc_recipient, hash_root, hash_count, timeout, value, fee, validity_start_height
        )
        return await self._client.call(RpcRequest("createNewHtlcTransaction", params), options)

    async def send_new_htlc_transaction(
        self,
        *,
        wallet: str,
        htlc_sender: str,
        htlc_recipient: str,
        hash_root: str,
        hash_count: int,
        timeout: int,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._new_htlc_params(
            wallet, htlc_sender, htlc_recipient, hash_root, hash_count, timeout, value, fee, validity_start_height
        )
        return await self._client.call(RpcRequest("sendNewHtlcTransaction", params), options)

    async def send_sync_new_htlc_transaction(
        self,
        *,
        wallet: str,
        htlc_sender: str,
        htlc_recipient: str,
        hash_root: str,
        hash_count: int,
        timeout: int,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = self._new_htlc_params(
            wallet, htlc_sender, htlc_recipient, hash_root, hash_count, timeout, value, fee, validity_start_height
        )
        return await self._send_and_wait(RpcRequest("sendNewHtlcTransaction", params), (wallet,), options)

    @staticmethod
    def _redeem_regular_htlc_params(
        wallet, contract_address, recipient, pre_image, hash_root, hash_count, value, fee, vsh
    ):
        return (
            wallet, contract_address, recipient, pre_image, hash_root, hash_count, value, fee,
            render_validity_start_height(vsh),
        )

    async def create_redeem_regular_htlc_transaction(
        self,
        *,
        wallet: str,
        contract_address: str,
        recipient: str,
        pre_image: str,
        hash_root: str,
        hash_count: int,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._redeem_regular_htlc_params(
            wallet, contract_address, recipient, pre_image, hash_root, hash_count, value, fee, validity_start_height
        )
        return await self._client.call(RpcRequest("createRedeemRegularHtlcTransaction", params), options)

    async def send_redeem_regular_htlc_transaction(
        self,
        *,
        wallet: str,
        contract_address: str,
        recipient: str,
        pre_image: str,
        hash_root: str,
        hash_count: int,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._redeem_regular_htlc_params(
            wallet, contract_address, recipient, pre_image, hash_root, hash_count, value, fee, validity_start_height
        )
        return await self._client.call(RpcRequest("sendRedeemRegularHtlcTransaction", params), options)

    async def send_sync_redeem_regular_htlc_transaction(
        self,
        *,
        wallet: str,
        contract_address: str,
        recipient: str,
        pre_image: str,
        hash_root: str,
        hash_count: int,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = self._redeem_regular_htlc_params(
            wallet, contract_address, recipient, pre_image, hash_root, hash_count, value, fee, validity_start_height
        )
        return await self._send_and_wait(
            RpcRequest("sendRedeemRegularHtlcTransaction", params), (contract_address, recipient), options
        )

    async def create_redeem_timeout_htlc_transaction(
        self,
        *,
        wallet: str,
        contract_address: str,
        recipient: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (wallet, contract_address, recipient, value, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("createRedeemTimeoutHtlcTransaction", params), options)

    async def send_redeem_timeout_htlc_transaction(
        self,
        *,
        wallet: str,
        contract_address: str,
        recipient: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (wallet, contract_address, recipient, value, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("sendRedeemTimeoutHtlcTransaction", params), options)

    async def send_sync_redeem_timeout_htlc_transaction(
        self,
        *,
        wallet: str,
        contract_address: str,
        recipient: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (wallet, contract_address, recipient, value, fee, render_validity_start_height(validity_start_height))
        return await self._send_and_wait(
            RpcRequest("sendRedeemTimeoutHtlcTransaction", params), (contract_address, recipient), options
        )

    @staticmethod
    def _redeem_early_htlc_params(
        contract_address, recipient, htlc_sender_signature, htlc_recipient_signature, value, fee, vsh
    ):
        return (
            contract_address, recipient, htlc_sender_signature, htlc_recipient_signature, value, fee,
            render_validity_start_height(vsh),
        )

    async def create_redeem_early_htlc_transaction(
        self,
        *,
        contract_address: str,
        recipient: str,
        htlc_sender_signature: str,
        htlc_recipient_signature: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._redeem_early_htlc_params(
            contract_address, recipient, htlc_sender_signature, htlc_recipient_signature, value, fee,
            validity_start_height,
        )
        return await self._client.call(RpcRequest("createRedeemEarlyHtlcTransaction", params), options)

    async def send_redeem_early_htlc_transaction(
        self,
        *,
        contract_address: str,
        recipient: str,
        htlc_sender_signature: str,
        htlc_recipient_signature: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._redeem_early_htlc_params(
            contract_address, recipient, htlc_sender_signature, htlc_recipient_signature, value, fee,
            validity_start_height,
        )
        return await self._client.call(RpcRequest("sendRedeemEarlyHtlcTransaction", params), options)

    async def send_sync_redeem_early_htlc_transaction(
        self,
        *,
        contract_address: str,
        recipient: str,
        htlc_sender_signature: str,
        htlc_recipient_signature: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = self._redeem_early_htlc_params(
            contract_address, recipient, htlc_sender_signature, htlc_recipient_signature, value, fee,
            validity_start_height,
        )
        return await self._send_and_wait(
            RpcRequest("sendRedeemEarlyHtlcTransaction", params), (contract_address, recipient), options
        )

    async def sign_redeem_early_htlc_transaction(
        self,
        *,
        contract_address: str,
        recipient: str,
        htlc_sender_signature: str,
        htlc_recipient_signature: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Signature over an early HTLC resolution, to be combined with the counterparty's."""
        params = self._redeem_early_htlc_params(
            contract_address, recipient, htlc_sender_signature, htlc_recipient_signature, value, fee,
            validity_start_height,
        )
        return await self._client.call(RpcRequest("signRedeemEarlyHtlcTransaction", params), options)

    # Staking

    async def create_new_staker_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        delegation: str | None,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Serialized transaction creating a staker delegating to ``delegation``."""
        params = (
            sender_wallet, staker_wallet, delegation, value, fee, render_validity_start_height(validity_start_height)
        )
        return await self._client.call(RpcRequest("createNewStakerTransaction", params), options)

    async def send_new_staker_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        delegation: str | None,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (
            sender_wallet, staker_wallet, delegation, value, fee, render_validity_start_height(validity_start_height)
        )
        return await self._client.call(RpcRequest("sendNewStakerTransaction", params), options)

    async def send_sync_new_staker_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        delegation: str | None,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (
            sender_wallet, staker_wallet, delegation, value, fee, render_validity_start_height(validity_start_height)
        )
        return await self._send_and_wait(
            RpcRequest("sendNewStakerTransaction", params), (sender_wallet, staker_wallet), options
        )

    async def create_stake_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Serialized transaction adding ``value`` to an existing staker."""
        params = (sender_wallet, staker_wallet, value, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("createStakeTransaction", params), options)

    async def send_stake_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (sender_wallet, staker_wallet, value, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("sendStakeTransaction", params), options)

    async def send_sync_stake_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (sender_wallet, staker_wallet, value, fee, render_validity_start_height(validity_start_height))
        return await self._send_and_wait(
            RpcRequest("sendStakeTransaction", params), (sender_wallet, staker_wallet), options
        )

    async def create_update_staker_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        new_delegation: str | None,
        new_inactive_balance: bool,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (
            sender_wallet, staker_wallet, new_delegation, new_inactive_balance, fee,
            render_validity_start_height(validity_start_height),
        )
        return await self._client.call(RpcRequest("createUpdateStakerTransaction", params), options)

    async def send_update_staker_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        new_delegation: str | None,
        new_inactive_balance: bool,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (
            sender_wallet, staker_wallet, new_delegation, new_inactive_balance, fee,
            render_validity_start_height(validity_start_height),
        )
        return await self._client.call(RpcRequest("sendUpdateStakerTransaction", params), options)

    async def send_sync_update_staker_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        new_delegation: str | None,
        new_inactive_balance: bool,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (
            sender_wallet, staker_wallet, new_delegation, new_inactive_balance, fee,
            render_validity_start_height(validity_start_height),
        )
        return await self._send_and_wait(
            RpcRequest("sendUpdateStakerTransaction", params), (sender_wallet, staker_wallet), options
        )

    async def create_set_active_stake_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        new_active_balance: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (
            sender_wallet, staker_wallet, new_active_balance, fee, render_validity_start_height(validity_start_height)
        )
        return await self._client.call(RpcRequest("createSetActiveStakeTransaction", params), options)

    async def send_set_active_stake_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        new_active_balance: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (
            sender_wallet, staker_wallet, new_active_balance, fee, render_validity_start_height(validity_start_height)
        )
        return await self._client.call(RpcRequest("sendSetActiveStakeTransaction", params), options)

    async def send_sync_set_active_stake_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        new_active_balance: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (
            sender_wallet, staker_wallet, new_active_balance, fee, render_validity_start_height(validity_start_height)
        )
        return await self._send_and_wait(
            RpcRequest("sendSetActiveStakeTransaction", params), (sender_wallet, staker_wallet), options
        )

    async def create_retire_stake_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        retire_stake: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (sender_wallet, staker_wallet, retire_stake, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("createRetireStakeTransaction", params), options)

    async def send_retire_stake_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        retire_stake: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (sender_wallet, staker_wallet, retire_stake, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("sendRetireStakeTransaction", params), options)

    async def send_sync_retire_stake_transaction(
        self,
        *,
        sender_wallet: str,
        staker_wallet: str,
        retire_stake: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (sender_wallet, staker_wallet, retire_stake, fee, render_validity_start_height(validity_start_height))
        return await self._send_and_wait(
            RpcRequest("sendRetireStakeTransaction", params), (sender_wallet, staker_wallet), options
        )

    async def create_remove_stake_transaction(
        self,
        *,
        staker_wallet: str,
        recipient: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Serialized transaction paying retired stake out to ``recipient``."""
        params = (staker_wallet, recipient, value, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("createRemoveStakeTransaction", params), options)

    async def send_remove_stake_transaction(
        self,
        *,
        staker_wallet: str,
        recipient: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (staker_wallet, recipient, value, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("sendRemoveStakeTransaction", params), options)

    async def send_sync_remove_stake_transaction(
        self,
        *,
        staker_wallet: str,
        recipient: str,
        value: int,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (staker_wallet, recipient, value, fee, render_validity_start_height(validity_start_height))
        return await self._send_and_wait(
            RpcRequest("sendRemoveStakeTransaction", params), (staker_wallet, recipient), options
        )

    # Validators

    @staticmethod
    def _new_validator_params(
        sender_wallet, validator, signing_secret_key, voting_secret_key, reward_address, signal_data, fee, vsh
    ):
        return (
            sender_wallet, validator, signing_secret_key, voting_secret_key, reward_address, signal_data, fee,
            render_validity_start_height(vsh),
        )

    async def create_new_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        signing_secret_key: str,
        voting_secret_key: str,
        reward_address: str,
        signal_data: str,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """
        Serialized transaction registering ``validator``.

        The validator deposit is taken from ``sender_wallet``.
        """
        params = self._new_validator_params(
            sender_wallet, validator, signing_secret_key, voting_secret_key, reward_address, signal_data, fee,
            validity_start_height,
        )
        return await self._client.call(RpcRequest("createNewValidatorTransaction", params), options)

    async def send_new_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        signing_secret_key: str,
        voting_secret_key: str,
        reward_address: str,
        signal_data: str,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._new_validator_params(
            sender_wallet, validator, signing_secret_key, voting_secret_key, reward_address, signal_data, fee,
            validity_start_height,
        )
        return await self._client.call(RpcRequest("sendNewValidatorTransaction", params), options)

    async def send_sync_new_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        signing_secret_key: str,
        voting_secret_key: str,
        reward_address: str,
        signal_data: str,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = self._new_validator_params(
            sender_wallet, validator, signing_secret_key, voting_secret_key, reward_address, signal_data, fee,
            validity_start_height,
        )
        return await self._send_and_wait(
            RpcRequest("sendNewValidatorTransaction", params), (sender_wallet, validator), options
        )

    @staticmethod
    def _update_validator_params(
        sender_wallet, validator, new_signing_secret_key, new_voting_secret_key, new_reward_address,
        new_signal_data, fee, vsh,
    ):
        return (
            sender_wallet, validator, new_signing_secret_key, new_voting_secret_key, new_reward_address,
            new_signal_data, fee, render_validity_start_height(vsh),
        )

    async def create_update_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        new_signing_secret_key: str | None,
        new_voting_secret_key: str | None,
        new_reward_address: str | None,
        new_signal_data: str | None,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._update_validator_params(
            sender_wallet, validator, new_signing_secret_key, new_voting_secret_key, new_reward_address,
            new_signal_data, fee, validity_start_height,
        )
        return await self._client.call(RpcRequest("createUpdateValidatorTransaction", params), options)

    async def send_update_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        new_signing_secret_key: str | None,
        new_voting_secret_key: str | None,
        new_reward_address: str | None,
        new_signal_data: str | None,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = self._update_validator_params(
            sender_wallet, validator, new_signing_secret_key, new_voting_secret_key, new_reward_address,
            new_signal_data, fee, validity_start_height,
        )
        return await self._client.call(RpcRequest("sendUpdateValidatorTransaction", params), options)

    async def send_sync_update_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        new_signing_secret_key: str | None,
        new_voting_secret_key: str | None,
        new_reward_address: str | None,
        new_signal_data: str | None,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = self._update_validator_params(
            sender_wallet, validator, new_signing_secret_key, new_voting_secret_key, new_reward_address,
            new_signal_data, fee, validity_start_height,
        )
        return await self._send_and_wait(
            RpcRequest("sendUpdateValidatorTransaction", params), (sender_wallet, validator), options
        )

    async def create_deactivate_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        signing_secret_key: str,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (sender_wallet, validator, signing_secret_key, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("createDeactivateValidatorTransaction", params), options)

    async def send_deactivate_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        signing_secret_key: str,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (sender_wallet, validator, signing_secret_key, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("sendDeactivateValidatorTransaction", params), options)

    async def send_sync_deactivate_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        signing_secret_key: str,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (sender_wallet, validator, signing_secret_key, fee, render_validity_start_height(validity_start_height))
        return await self._send_and_wait(
            RpcRequest("sendDeactivateValidatorTransaction", params), (sender_wallet, validator), options
        )

    async def create_reactivate_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        signing_secret_key: str,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (sender_wallet, validator, signing_secret_key, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("createReactivateValidatorTransaction", params), options)

    async def send_reactivate_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        signing_secret_key: str,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (sender_wallet, validator, signing_secret_key, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("sendReactivateValidatorTransaction", params), options)

    async def send_sync_reactivate_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        signing_secret_key: str,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (sender_wallet, validator, signing_secret_key, fee, render_validity_start_height(validity_start_height))
        return await self._send_and_wait(
            RpcRequest("sendReactivateValidatorTransaction", params), (sender_wallet, validator), options
        )

    async def create_retire_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (sender_wallet, validator, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("createRetireValidatorTransaction", params), options)

    async def send_retire_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        fee: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (sender_wallet, validator, fee, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("sendRetireValidatorTransaction", params), options)

    async def send_sync_retire_validator_transaction(
        self,
        *,
        sender_wallet: str,
        validator: str,
        fee: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (sender_wallet, validator, fee, render_validity_start_height(validity_start_height))
        return await self._send_and_wait(
            RpcRequest("sendRetireValidatorTransaction", params), (sender_wallet, validator), options
        )

    async def create_delete_validator_transaction(
        self,
        *,
        validator: str,
        recipient: str,
        fee: int,
        value: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Serialized transaction deleting a retired validator and paying its deposit to ``recipient``."""
        params = (validator, recipient, fee, value, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("createDeleteValidatorTransaction", params), options)

    async def send_delete_validator_transaction(
        self,
        *,
        validator: str,
        recipient: str,
        fee: int,
        value: int,
        validity_start_height: VSH = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        params = (validator, recipient, fee, value, render_validity_start_height(validity_start_height))
        return await self._client.call(RpcRequest("sendDeleteValidatorTransaction", params), options)

    async def send_sync_delete_validator_transaction(
        self,
        *,
        validator: str,
        recipient: str,
        fee: int,
        value: int,
        validity_start_height: VSH = None,
        options: SendTxCallOptions | None = None,
    ) -> TxLog:
        params = (validator, recipient, fee, value, render_validity_start_height(validity_start_height))
        return await self._send_and_wait(
            RpcRequest("sendDeleteValidatorTransaction", params), (validator, recipient), options
        )
