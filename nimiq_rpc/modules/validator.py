"""Queries against the node's own validator, when it runs one."""

from __future__ import annotations

from nimiq_rpc.client.http import HttpClient
from nimiq_rpc.config.schema import HttpOptions
from nimiq_rpc.types.common import RpcRequest
from nimiq_rpc.types.logs import RPCData


class ValidatorClient:
    def __init__(self, http: HttpClient):
        self._client = http

    async def get_address(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getAddress"), options)

    async def get_signing_key(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getSigningKey"), options)

    async def get_voting_key(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("getVotingKey"), options)

    async def set_automatic_reactivation(
        self,
        automatic_reactivation: bool,
        options: HttpOptions | None = None,
    ) -> RPCData:
        """Let the node reactivate its validator after it got deactivated."""
        return await self._client.call(RpcRequest("setAutomaticReactivation", (automatic_reactivation,)), options)

    async def is_validator_elected(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("isValidatorElected"), options)

    async def is_validator_synced(self, options: HttpOptions | None = None) -> RPCData:
        return await self._client.call(RpcRequest("isValidatorSynced"), options)
