"""Signer backend – adapter for viem-style wallet clients.

A wallet client exposes its account as ``client.account.address`` and signs
with keyword arguments ``domain``, ``types``, ``primary_type`` and
``message``.  It may be a remote wallet; signing can take arbitrarily long.
"""
from __future__ import annotations

import inspect
from typing import Any, Protocol

from event_chain.events.types import TypedDataDomain, TypedDataTypes, TypedDataValue
from event_chain.kernel.errors import SignerUnavailableError
from event_chain.signer.typed_data import normalize_typed_value, signature_to_hex


class WalletAccount(Protocol):
    address: str


class WalletClient(Protocol):
    account: WalletAccount | None

    def sign_typed_data(
        self,
        *,
        domain: TypedDataDomain,
        types: TypedDataTypes,
        primary_type: str,
        message: TypedDataValue,
    ) -> Any: ...


class WalletClientSigner:
    """Implements :class:`~event_chain.signer.ports.Signer` on a wallet client."""

    def __init__(self, client: WalletClient) -> None:
        self._client = client

    async def get_address(self) -> str:
        account = self._client.account
        if account is None or not account.address:
            raise SignerUnavailableError("Wallet client has no account connected")
        return account.address

    async def sign_typed_data(
        self,
        domain: TypedDataDomain,
        types: TypedDataTypes,
        value: TypedDataValue,
    ) -> str:
        result = self._client.sign_typed_data(
            domain=dict(domain),
            types={name: list(fields) for name, fields in types.items()},
            primary_type=next(iter(types)),
            message=normalize_typed_value(value),
        )
        if inspect.isawaitable(result):
            result = await result
        return signature_to_hex(result)


__all__ = ["WalletAccount", "WalletClient", "WalletClientSigner"]
