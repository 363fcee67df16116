"""Event – a single signed state transition on an event chain.

An event's canonical binary form (see :meth:`Event.to_binary`) determines its
hash; its signature covers an EIP-712 typed-data view of the same fields
(see :meth:`Event.get_sign_data`).
"""
from __future__ import annotations

import inspect
import struct
from typing import TYPE_CHECKING, Any, Mapping

from event_chain.events.constants import (
    ADDRESS_TEXT_LENGTH,
    EVENT_BINARY_MIN_LENGTH,
    EVENT_CHAIN_V3,
    HASH_LENGTH,
    MAX_UINT16,
    MAX_UINT32,
    SIGN_DOMAIN_NAME,
    SUPPORTED_VERSIONS,
)
from event_chain.events.payload import decode_payload, encode_payload
from event_chain.events.types import Attachment, SignData
from event_chain.kernel.binary import Binary
from event_chain.kernel.errors import (
    EncodingError,
    EncodingTooLargeError,
    IncompleteEventError,
    ParseError,
)
from event_chain.kernel.time import Clock, SystemClock

if TYPE_CHECKING:
    from event_chain.events.chain import EventChain
    from event_chain.signer.ports import Signer, VerifyFn

_EVENT_TYPES: list[dict[str, str]] = [
    {"name": "version", "type": "uint256"},
    {"name": "previous", "type": "bytes32"},
    {"name": "signer", "type": "address"},
    {"name": "timestamp", "type": "uint256"},
    {"name": "mediaType", "type": "string"},
    {"name": "dataHash", "type": "bytes32"},
]


def _optional_hex(value: str | None) -> Binary | None:
    return Binary.from_hex(value) if value else None


class Event:
    """A payload, its media type, a link to the previous event and a signature.

    Args:
        payload: Raw bytes, text, or a JSON-able value (see
            :func:`~event_chain.events.payload.encode_payload`).
        media_type: Explicit content type; defaults per payload kind.
        previous: Hash of the preceding event, as hex text or raw bytes.

    ``supplied_hash`` holds a hash provided out-of-band (deserialization).
    When it is ``None`` :attr:`hash` is computed from the current fields on
    every access.
    """

    def __init__(
        self,
        payload: Any,
        media_type: str | None = None,
        previous: str | bytes | None = None,
    ) -> None:
        self.version: int = EVENT_CHAIN_V3
        self.network_id: int = 0
        self.media_type, self.data = encode_payload(payload, media_type)
        self.timestamp: int | None = None
        self.previous: Binary | None = None
        self.signer_address: str | None = None
        self.signature: Binary | None = None
        self.supplied_hash: Binary | None = None
        self.attachments: list[Attachment] = []

        if previous:
            self.previous = Binary.from_hex(previous) if isinstance(previous, str) else Binary(previous)

    def __repr__(self) -> str:
        return (
            f"Event(media_type={self.media_type!r}, previous="
            f"{self.previous.to_hex() if self.previous else None!r}, signer={self.signer_address!r})"
        )

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def add_attachment(self, name: str, payload: Any, media_type: str | None = None) -> Attachment:
        media_type, data = encode_payload(payload, media_type)
        attachment = Attachment(name=name, media_type=media_type, data=data)
        self.attachments.append(attachment)
        return attachment

    @property
    def parsed_data(self) -> Any:
        return decode_payload(self.media_type, self.data)

    # ------------------------------------------------------------------
    # Hashing / canonical binary
    # ------------------------------------------------------------------

    @property
    def hash(self) -> Binary:
        if self.supplied_hash is not None:
            return self.supplied_hash
        return Binary(self.to_binary()).hash()

    def is_complete(self) -> bool:
        """Whether the event has everything :meth:`to_binary` needs."""
        return self.data is not None and bool(self.signer_address) and bool(self.previous)

    def to_binary(self) -> bytes:
        """Canonical encoding, all integers big-endian::

            previous (32) ‖ signer address (42 ASCII) ‖ timestamp (int32)
            ‖ media type length (uint16) ‖ media type ‖ data length (uint32) ‖ data
        """
        if self.data is None:
            raise IncompleteEventError("Event cannot be converted to binary: data unknown")
        if not self.signer_address:
            raise IncompleteEventError("Event cannot be converted to binary: signer address not set")
        if not self.previous:
            raise IncompleteEventError(
                "Event cannot be converted to binary: event is not part of an event chain"
            )
        if self.version not in SUPPORTED_VERSIONS:
            raise IncompleteEventError(
                f"Event cannot be converted to binary: version {self.version} not supported"
            )

        if len(self.signer_address) != ADDRESS_TEXT_LENGTH or not self.signer_address.isascii():
            raise EncodingError(
                f"Invalid signer address: expected {ADDRESS_TEXT_LENGTH} ASCII characters",
                detail={"field": "signer_address", "value": self.signer_address},
            )

        media_type = self.media_type.encode("utf-8")
        if len(media_type) > MAX_UINT16:
            raise EncodingTooLargeError(
                "Media type too long: exceeds uint16", field="media_type", size=len(media_type), limit=MAX_UINT16
            )
        if len(self.data) > MAX_UINT32:
            raise EncodingTooLargeError(
                "Data too long: exceeds uint32", field="data", size=len(self.data), limit=MAX_UINT32
            )

        return Binary.concat(
            self.previous,
            self.signer_address.encode("ascii"),
            Binary.from_int32(self.timestamp or 0),
            Binary.from_uint16(len(media_type)),
            media_type,
            Binary.from_uint32(len(self.data)),
            self.data,
        )

    def verify_hash(self) -> bool:
        """Whether :attr:`hash` matches the hash of the current content."""
        try:
            return self.hash == Binary(self.to_binary()).hash()
        except Exception:  # noqa: BLE001
            return False

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def get_sign_data(self) -> SignData:
        if self.version not in SUPPORTED_VERSIONS:
            raise IncompleteEventError(f"version {self.version} not supported")
        if not self.previous:
            raise IncompleteEventError("previous is required")
        if not self.signer_address:
            raise IncompleteEventError("signer address is required")
        if not self.timestamp:
            raise IncompleteEventError("timestamp is required")

        return SignData(
            domain={
                "name": SIGN_DOMAIN_NAME,
                "version": str(self.version),
                "chainId": self.network_id,
            },
            types={"Event": [dict(field) for field in _EVENT_TYPES]},
            value={
                "version": self.version,
                "previous": self.previous,
                "signer": self.signer_address,
                "timestamp": self.timestamp,
                "mediaType": self.media_type,
                "dataHash": self.data.hash(),
            },
        )

    async def sign_with(self, signer: Signer, *, clock: Clock | None = None) -> "Event":
        if not self.timestamp:
            self.timestamp = (clock or SystemClock()).timestamp_ms()
        if not self.signer_address:
            self.signer_address = await signer.get_address()

        sign_data = self.get_sign_data()
        signature = await signer.sign_typed_data(sign_data.domain, sign_data.types, sign_data.value)
        self.signature = Binary.from_hex(signature)
        return self

    def is_signed(self) -> bool:
        return self.signature is not None

    async def verify_signature(self, verify: VerifyFn) -> bool:
        """Check the signature with an injected verifier; never raises."""
        if not self.signature or not self.signer_address:
            return False
        try:
            sign_data = self.get_sign_data()
            result = verify(
                self.signer_address,
                sign_data.domain,
                sign_data.types,
                sign_data.value,
                self.signature.to_hex(),
            )
            if inspect.isawaitable(result):
                result = await result
            return bool(result)
        except Exception:  # noqa: BLE001
            return False

    def add_to(self, chain: EventChain) -> "Event":
        chain.add(self)
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        """JSON-able dict; byte fields are ``0x`` hex except payloads (base64)."""
        data: dict[str, Any] = {
            "version": self.version,
            "mediaType": self.media_type,
            "data": self.data.base64,
        }
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp
        if self.previous is not None:
            data["previous"] = self.previous.to_hex()
        if self.signer_address is not None:
            data["signerAddress"] = self.signer_address
        if self.signature is not None:
            data["signature"] = self.signature.to_hex()
        if self.supplied_hash is not None or self.is_complete():
            data["hash"] = self.hash.to_hex()
        if self.attachments:
            data["attachments"] = [
                {"name": att.name, "mediaType": att.media_type, "data": att.data.base64}
                for att in self.attachments
            ]
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Event":
        try:
            event = cls(Binary.from_base64(data["data"]), data["mediaType"], data.get("previous"))
            event.version = int(data.get("version", EVENT_CHAIN_V3))
            timestamp = data.get("timestamp")
            event.timestamp = int(timestamp) if timestamp is not None else None
            event.signer_address = data.get("signerAddress")
            event.signature = _optional_hex(data.get("signature"))
            event.supplied_hash = _optional_hex(data.get("hash"))
            for att in data.get("attachments") or []:
                event.add_attachment(att["name"], Binary.from_base64(att["data"]), att["mediaType"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(f"Failed to create event from JSON: {exc}", cause=exc) from exc
        return event

    @classmethod
    def from_binary(cls, data: bytes) -> "Event":
        """Parse the canonical encoding.

        The whole input's hash becomes ``supplied_hash`` so a transported
        event keeps the identity it had when it was encoded.
        """
        if len(data) < EVENT_BINARY_MIN_LENGTH:
            raise ParseError("Invalid event binary: too short", field="event", offset=0)

        offset = 0
        previous = bytes(data[offset : offset + HASH_LENGTH])
        offset += HASH_LENGTH

        try:
            signer_address = bytes(data[offset : offset + ADDRESS_TEXT_LENGTH]).decode("ascii")
        except UnicodeDecodeError as exc:
            raise ParseError("Invalid event binary: signer address is not ASCII", field="signer", offset=offset) from exc
        offset += ADDRESS_TEXT_LENGTH

        (timestamp,) = struct.unpack_from(">i", data, offset)
        offset += 4

        (media_type_length,) = struct.unpack_from(">H", data, offset)
        offset += 2
        if offset + media_type_length > len(data):
            raise ParseError("Invalid event binary: mediaType out of bounds", field="media_type", offset=offset)
        try:
            media_type = bytes(data[offset : offset + media_type_length]).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError("Invalid event binary: mediaType is not UTF-8", field="media_type", offset=offset) from exc
        offset += media_type_length

        if offset + 4 > len(data):
            raise ParseError("Invalid event binary: data length out of bounds", field="data", offset=offset)
        (data_length,) = struct.unpack_from(">I", data, offset)
        offset += 4
        if offset + data_length > len(data):
            raise ParseError("Invalid event binary: data out of bounds", field="data", offset=offset)
        payload = bytes(data[offset : offset + data_length])
        offset += data_length

        if offset != len(data):
            raise ParseError("Invalid event binary: trailing bytes", field="event", offset=offset)

        event = cls(payload, media_type, previous)
        event.signer_address = signer_address
        event.timestamp = timestamp
        event.supplied_hash = Binary(data).hash()
        return event

    @classmethod
    def from_(cls, data: bytes | Mapping[str, Any]) -> "Event":
        """Deserialize from either the binary or the JSON form."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            return cls.from_binary(bytes(data))
        return cls.from_json(data)


__all__ = ["Event"]
