"""Signer backend – an eth-account ``LocalAccount`` holding a private key."""
from __future__ import annotations

from eth_account import Account
from eth_account.signers.local import LocalAccount

from event_chain.events.types import TypedDataDomain, TypedDataTypes, TypedDataValue
from event_chain.signer.typed_data import encode_sign_data, signature_to_hex


class LocalAccountSigner:
    """Signs typed data with a key held in process memory.

    The key stays inside the wrapped :class:`LocalAccount`; this class never
    exposes it.

    Example::

        signer = LocalAccountSigner.from_key("0x" + "11" * 32)
        await event.sign_with(signer)
    """

    def __init__(self, account: LocalAccount) -> None:
        self._account = account

    @classmethod
    def from_key(cls, private_key: str | bytes) -> "LocalAccountSigner":
        return cls(Account.from_key(private_key))

    @property
    def address(self) -> str:
        return self._account.address

    async def get_address(self) -> str:
        return self._account.address

    async def sign_typed_data(
        self,
        domain: TypedDataDomain,
        types: TypedDataTypes,
        value: TypedDataValue,
    ) -> str:
        signed = self._account.sign_message(encode_sign_data(domain, types, value))
        return signature_to_hex(bytes(signed.signature))


__all__ = ["LocalAccountSigner"]
