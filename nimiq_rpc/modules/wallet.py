"""Key management in the node's wallet."""

from __future__ import annotations

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData


class WalletClient:
    def __init__(self, http: HttpClient):
        self._client = http

    async def import_raw_key(
        self,
        key_data: str,
        *,
        passphrase: str | None = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Import a hex private key; returns the account address."""
        return await self._client.call(RpcRequest("importRawKey", (key_data, passphrase)), options)

    async def is_account_imported(self, address: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("isAccountImported", (address,)), options)

    async def list_accounts(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("listAccounts"), options)

    async def lock_account(self, address: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("lockAccount", (address,)), options)

    async def create_account(self, *, passphrase: str | None = None, options: HttpOptions | None = None) -> RPCData:
        """Create a new account; returns address, public key and private key."""
        return await self._client.call(RpcRequest("createAccount", (passphrase,)), options)

    async def unlock_account(
        self,
        address: str,
        *,
        passphrase: str | None = None,
        duration: int | None = None,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """
        Unlock an account so the node can sign with it.

        Without ``duration`` the account stays unlocked until locked again.
        """
        return await self._client.call(RpcRequest("unlockAccount", (address, passphrase, duration)), options)

    async def is_account_unlocked(self, address: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("isAccountUnlocked", (address,)), options)

    async def sign(
        self,
        message: str,
        address: str,
        *,
        passphrase: str | None = None,
        is_hex: bool = False,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Sign ``message`` with the key of ``address``; returns public key and signature."""
        return await self._client.call(RpcRequest("sign", (message, address, passphrase, is_hex)), options)

    async def verify_signature(
        self,
        message: str,
        public_key: str,
        signature: str,
        *,
        is_hex: bool = False,
        options: HttpOptions | None = None,
    ) -> RPCData:
        request = RpcRequest("verifySignature", (message, public_key, signature, is_hex))
        return await self._client.call(request, options)

    async def remove_account(self, address: str, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("removeAccount", (address,)), options)
