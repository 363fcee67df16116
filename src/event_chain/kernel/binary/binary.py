"""Kernel binary – ``Binary`` byte-string value type.

``Binary`` is an immutable ``bytes`` subclass that adds the conversions the
event chain needs: keccak-256 hashing, ``0x``-prefixed hex, base58, base64,
multibase decoding and fixed-width big-endian integers.

Example::

    Binary("hello").hash().to_hex()
    Binary.concat(Binary.from_uint16(5), b"media")
"""
from __future__ import annotations

import base64
import binascii
import struct
from typing import Iterable, SupportsIndex

import base58
from eth_utils import keccak

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class Binary(bytes):
    """Immutable byte string with encoding helpers.

    Text given to the constructor is UTF-8 encoded; anything else is passed to
    :class:`bytes` unchanged.
    """

    def __new__(cls, value: str | bytes | bytearray | memoryview | Iterable[int] | SupportsIndex = b"") -> "Binary":
        if isinstance(value, str):
            return super().__new__(cls, value.encode("utf-8"))
        return super().__new__(cls, value)

    # ------------------------------------------------------------------
    # Encodings
    # ------------------------------------------------------------------

    def to_hex(self) -> str:
        """Return ``0x``-prefixed lowercase hex."""
        return "0x" + self.hex()

    @property
    def base58(self) -> str:
        return base58.b58encode(bytes(self)).decode("ascii")

    @property
    def base64(self) -> str:
        return base64.b64encode(bytes(self)).decode("ascii")

    def to_text(self) -> str:
        """Decode as UTF-8, replacing undecodable sequences."""
        return bytes(self).decode("utf-8", errors="replace")

    def hash(self) -> "Binary":
        """Keccak-256 digest (the Ethereum hash function)."""
        return Binary(keccak(bytes(self)))

    def reversed(self) -> "Binary":
        return Binary(bytes(self)[::-1])

    def __repr__(self) -> str:
        return f"Binary({self.to_hex()!r})"

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_hex(cls, value: str) -> "Binary":
        hex_value = value[2:] if value[:2] in ("0x", "0X") else value
        if len(hex_value) % 2 != 0:
            raise ValueError("Invalid hex string: hex string must have even length")
        try:
            return cls(bytes.fromhex(hex_value))
        except ValueError as exc:
            raise ValueError(f"Invalid hex string: {exc}") from exc

    @classmethod
    def from_base58(cls, value: str) -> "Binary":
        try:
            return cls(base58.b58decode(value))
        except ValueError as exc:
            raise ValueError(f"Invalid base58 string: {exc}") from exc

    @classmethod
    def from_base64(cls, value: str) -> "Binary":
        try:
            return cls(base64.b64decode(value, validate=True))
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"Invalid base64 string: {exc}") from exc

    @classmethod
    def from_multibase(cls, value: str) -> "Binary":
        """Decode a multibase string (``z`` base58btc, ``m`` base64, ``f``/``F`` hex)."""
        code, encoded = value[:1], value[1:]
        if code == "z":
            return cls.from_base58(encoded)
        if code == "m":
            # multibase base64 is unpadded
            return cls.from_base64(encoded + "=" * (-len(encoded) % 4))
        if code in ("f", "F"):
            return cls.from_hex(encoded)
        raise ValueError(f"Invalid multibase string: unsupported encoding {code!r}")

    @classmethod
    def from_uint16(cls, value: int) -> "Binary":
        return cls(struct.pack(">H", value))

    @classmethod
    def from_uint32(cls, value: int) -> "Binary":
        return cls(struct.pack(">I", value))

    @classmethod
    def from_int32(cls, value: int) -> "Binary":
        """Big-endian int32; out-of-range values wrap to 32 bits two's complement."""
        if not _INT32_MIN <= value <= _INT32_MAX:
            value = ((value - _INT32_MIN) % 2**32) + _INT32_MIN
        return cls(struct.pack(">i", value))

    @classmethod
    def concat(cls, *items: bytes) -> "Binary":
        return cls(b"".join(bytes(item) for item in items))


__all__ = ["Binary"]
