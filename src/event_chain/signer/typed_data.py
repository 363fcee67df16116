"""EIP-712 helpers shared by the eth-account signing and verification backends."""
from __future__ import annotations

from typing import Any

from eth_account.messages import SignableMessage, encode_typed_data

from event_chain.events.types import TypedDataDomain, TypedDataTypes, TypedDataValue


def normalize_typed_value(value: Any) -> Any:
    """Convert byte strings (including nested ones) to ``0x`` hex text."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "0x" + bytes(value).hex()
    if isinstance(value, dict):
        return {k: normalize_typed_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_typed_value(v) for v in value]
    return value


def encode_sign_data(
    domain: TypedDataDomain,
    types: TypedDataTypes,
    value: TypedDataValue,
) -> SignableMessage:
    """Build the signable EIP-712 message for *value*."""
    return encode_typed_data(
        domain_data=dict(domain),
        message_types={name: list(fields) for name, fields in types.items()},
        message_data=normalize_typed_value(value),
    )


def signature_to_hex(signature: bytes | str) -> str:
    if isinstance(signature, str):
        return signature if signature.startswith("0x") else "0x" + signature
    return "0x" + bytes(signature).hex()


__all__ = ["encode_sign_data", "normalize_typed_value", "signature_to_hex"]
