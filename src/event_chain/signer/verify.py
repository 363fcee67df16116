"""Verification backends for EIP-712 event signatures.

Each backend satisfies :data:`~event_chain.signer.ports.VerifyFn`; the chain
treats sync and async verifiers alike.
"""
from __future__ import annotations

import asyncio
from typing import Callable

from eth_account import Account

from event_chain.events.types import TypedDataDomain, TypedDataTypes, TypedDataValue
from event_chain.signer.typed_data import encode_sign_data


def recover_typed_data_signer(
    domain: TypedDataDomain,
    types: TypedDataTypes,
    value: TypedDataValue,
    signature: str,
) -> str:
    """Return the checksummed address that produced *signature*."""
    return Account.recover_message(encode_sign_data(domain, types, value), signature=signature)


def verify_typed_data(
    address: str,
    domain: TypedDataDomain,
    types: TypedDataTypes,
    value: TypedDataValue,
    signature: str,
) -> bool:
    """Recover the signer and compare it to *address*, ignoring checksum case."""
    recovered = recover_typed_data_signer(domain, types, value, signature)
    return recovered.lower() == address.lower()


class RecoveringVerifier:
    """Callable verifier that can optionally restrict accepted signers.

    Args:
        allowed: Addresses that may sign.  ``None`` accepts any signer whose
            recovered address matches the claimed one.
    """

    def __init__(self, allowed: set[str] | frozenset[str] | None = None) -> None:
        self._allowed = None if allowed is None else frozenset(a.lower() for a in allowed)

    def __call__(
        self,
        address: str,
        domain: TypedDataDomain,
        types: TypedDataTypes,
        value: TypedDataValue,
        signature: str,
    ) -> bool:
        if self._allowed is not None and address.lower() not in self._allowed:
            return False
        return verify_typed_data(address, domain, types, value, signature)


class AsyncVerifier:
    """Run a synchronous verifier in a worker thread.

    Useful when verification is CPU-heavy or blocks, and the caller validates
    chains from an event loop.
    """

    def __init__(self, inner: Callable[[str, TypedDataDomain, TypedDataTypes, TypedDataValue, str], bool]) -> None:
        self._inner = inner

    async def __call__(
        self,
        address: str,
        domain: TypedDataDomain,
        types: TypedDataTypes,
        value: TypedDataValue,
        signature: str,
    ) -> bool:
        return await asyncio.to_thread(self._inner, address, domain, types, value, signature)


__all__ = ["AsyncVerifier", "RecoveringVerifier", "recover_typed_data_signer", "verify_typed_data"]
