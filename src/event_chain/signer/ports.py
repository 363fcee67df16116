"""Signer ports – the two capabilities events and chains depend on.

Neither :class:`~event_chain.events.Event` nor
:class:`~event_chain.events.EventChain` references a concrete wallet library;
they only call a :class:`Signer` and a :data:`VerifyFn`.
"""
from __future__ import annotations

from typing import Awaitable, Callable, Protocol, TypeAlias, runtime_checkable

from event_chain.events.types import TypedDataDomain, TypedDataTypes, TypedDataValue


@runtime_checkable
class Signer(Protocol):
    """Port: produces EIP-712 signatures for a stable account address."""

    async def get_address(self) -> str: ...

    async def sign_typed_data(
        self,
        domain: TypedDataDomain,
        types: TypedDataTypes,
        value: TypedDataValue,
    ) -> str: ...


VerifyFn: TypeAlias = Callable[
    [str, TypedDataDomain, TypedDataTypes, TypedDataValue, str],
    bool | Awaitable[bool],
]
"""``verify(address, domain, types, value, signature_hex)``; may return an awaitable."""


__all__ = ["Signer", "VerifyFn"]
