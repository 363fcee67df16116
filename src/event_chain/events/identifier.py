"""Chain identifiers – self-certifying, checksummed ids.

Every id form has the same 49-byte layout, rendered as ``0x`` hex::

    prefix (1) ‖ network id (uint32 BE) ‖ nonce (20) ‖ keccak(group)[:20] ‖ checksum (4)

The checksum is ``keccak(first 45 bytes)[:4]``.  For a chain id the group is
the creator's address; for a derived id it is the parent chain id.
"""
from __future__ import annotations

import struct

from event_chain.events.constants import (
    CHECKSUM_LENGTH,
    GROUP_HASH_LENGTH,
    ID_LENGTH,
    ID_RAW_LENGTH,
    NONCE_LENGTH,
)
from event_chain.kernel.binary import Binary
from event_chain.kernel.errors import InvalidIdentifierError

_NETWORK_OFFSET = 1
_GROUP_OFFSET = 1 + 4 + NONCE_LENGTH


def _to_bytes(value: str | bytes) -> Binary:
    """Hex text (an address or id) or raw bytes."""
    if isinstance(value, str):
        return Binary.from_hex(value)
    return Binary(value)


def create_nonce(seed: str | bytes) -> Binary:
    """Derive a deterministic 20-byte nonce from *seed*."""
    return Binary(Binary(seed).hash()[:NONCE_LENGTH])


def build_id(prefix: int, network_id: int, group: str | bytes, nonce: bytes) -> str:
    """Assemble and checksum an identifier."""
    if len(nonce) != NONCE_LENGTH:
        raise InvalidIdentifierError(f"Random bytes should have a length of {NONCE_LENGTH}")
    try:
        head = struct.pack(">BI", prefix, network_id)
    except struct.error as exc:
        raise InvalidIdentifierError(f"Invalid id prefix or network id: {exc}", cause=exc) from exc

    try:
        group_hash = _to_bytes(group).hash()[:GROUP_HASH_LENGTH]
    except ValueError as exc:
        raise InvalidIdentifierError(f"Invalid id group: {exc}", cause=exc) from exc

    raw = Binary.concat(head, nonce, group_hash)
    checksum = raw.hash()[:CHECKSUM_LENGTH]
    return Binary.concat(raw, checksum).to_hex()


def decode_id(id: str) -> Binary:
    """Decode *id* and verify its length and checksum."""
    try:
        data = Binary.from_hex(id)
    except ValueError as exc:
        raise InvalidIdentifierError(f"Invalid chain id {id!r}: {exc}", cause=exc) from exc
    if len(data) != ID_LENGTH:
        raise InvalidIdentifierError(
            f"Invalid chain id {id!r}: expected {ID_LENGTH} bytes, got {len(data)}",
            detail={"length": len(data)},
        )
    if Binary(data[:ID_RAW_LENGTH]).hash()[:CHECKSUM_LENGTH] != data[ID_RAW_LENGTH:]:
        raise InvalidIdentifierError(f"Invalid chain id {id!r}: checksum mismatch")
    return data


def network_id_of(id_bytes: bytes) -> int:
    return struct.unpack_from(">I", id_bytes, _NETWORK_OFFSET)[0]


def validate_id(prefix: int, network_id: int, id: str, group: str | bytes | None = None) -> bool:
    """Whether *id* is a well-formed id with this prefix, network and (optionally) group."""
    try:
        data = decode_id(id)
        if data[0] != prefix or network_id_of(data) != network_id:
            return False
        if group is not None:
            expected = _to_bytes(group).hash()[:GROUP_HASH_LENGTH]
            if data[_GROUP_OFFSET:ID_RAW_LENGTH] != expected:
                return False
    except (InvalidIdentifierError, ValueError):
        return False
    return True


__all__ = ["build_id", "create_nonce", "decode_id", "network_id_of", "validate_id"]
