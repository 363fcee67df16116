"""EventChain – an ordered, hash-linked, signed sequence of events.

A chain is identified by a checksummed id (see
:mod:`event_chain.events.identifier`).  Hashes and states are keccak-256::

    initial_hash  = keccak(id bytes)            previous of the first event
    initial_state = keccak(reversed id bytes)   seed of the state accumulator
    state_n       = keccak(state_{n-1} ‖ hash of event n)

A chain can be cut into a *partial* chain holding only a suffix; its
:class:`~event_chain.events.types.PartialHeader` records the hash and state
where the suffix attaches, so the receiver can check and later merge it.

Mutation is synchronous and not thread-safe; serialize ``add`` calls on one
chain instance.  Only :meth:`EventChain.validate` (and ``Event.sign_with``)
await external capabilities.
"""
from __future__ import annotations

import struct
from typing import TYPE_CHECKING, Any, Mapping

from event_chain.config.settings import EventChainSettings
from event_chain.events.conflict import MergeConflict
from event_chain.events.constants import (
    DERIVED_ID_PREFIX,
    EVENT_CHAIN_V3,
    GENESIS_ID_PREFIX,
    HASH_LENGTH,
    ID_LENGTH,
    MAX_UINT16,
    NONCE_LENGTH,
    SUPPORTED_VERSIONS,
)
from event_chain.events.event import Event
from event_chain.events.identifier import (
    build_id,
    create_nonce,
    decode_id,
    network_id_of,
    validate_id,
)
from event_chain.events.types import AnchorEntry, PartialHeader
from event_chain.kernel.binary import Binary
from event_chain.kernel.errors import (
    ChainLinkageError,
    ChainStateError,
    ChainValidationError,
    EncodingError,
    EncodingTooLargeError,
    HashMismatchError,
    IncompleteEventError,
    InvalidIdentifierError,
    ParseError,
    SignatureError,
)
from event_chain.kernel.random import RandomSource, SystemRandomSource
from event_chain.observability.logging import get_logger

if TYPE_CHECKING:
    from event_chain.signer.ports import VerifyFn

log = get_logger(__name__)

_HEADER_LENGTH = 1 + ID_LENGTH + 1


def _describe(event: Event) -> str:
    try:
        return event.hash.to_hex()
    except (IncompleteEventError, EncodingError):
        return "unknown hash"


def _nonce_bytes(nonce: str | bytes | None, random_source: RandomSource | None) -> bytes:
    if nonce is not None:
        return create_nonce(nonce)
    return (random_source or SystemRandomSource()).token_bytes(NONCE_LENGTH)


class EventChain:
    """Ordered events anchored to a chain id.

    Args:
        id: ``0x`` hex chain id; it must decode and pass its checksum.

    Raises:
        InvalidIdentifierError: The id is malformed.
    """

    build_id = staticmethod(build_id)
    validate_id = staticmethod(validate_id)
    create_nonce = staticmethod(create_nonce)

    def __init__(self, id: str) -> None:
        self._id_bytes = decode_id(id)
        self.id: str = self._id_bytes.to_hex()
        self.network_id: int = network_id_of(self._id_bytes)
        self.version: int = EVENT_CHAIN_V3
        self.events: list[Event] = []
        self.partial: PartialHeader | None = None

    def __repr__(self) -> str:
        return f"EventChain(id={self.id!r}, events={len(self.events)}, partial={self.is_partial()})"

    def __len__(self) -> int:
        return len(self.events)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        address: str,
        network_id: int | None = None,
        nonce: str | bytes | None = None,
        *,
        random_source: RandomSource | None = None,
        settings: EventChainSettings | None = None,
    ) -> "EventChain":
        """New chain for creator *address*; deterministic when *nonce* is given.

        Without *network_id* the chain lands on ``settings.default_network_id``,
        read from ``EVENT_CHAIN_*`` variables when no settings are passed.
        """
        if network_id is None:
            network_id = (settings or EventChainSettings.from_env()).default_network_id
        return cls(build_id(GENESIS_ID_PREFIX, network_id, address, _nonce_bytes(nonce, random_source)))

    def create_derived_id(
        self,
        nonce: str | bytes | None = None,
        *,
        random_source: RandomSource | None = None,
    ) -> str:
        """An id that can later be recognised as belonging to this chain."""
        return build_id(DERIVED_ID_PREFIX, self.network_id, self._id_bytes, _nonce_bytes(nonce, random_source))

    def is_derived_id(self, id: str) -> bool:
        return validate_id(DERIVED_ID_PREFIX, self.network_id, id, self._id_bytes)

    def is_created_by(self, address: str, network_id: int) -> bool:
        return validate_id(GENESIS_ID_PREFIX, network_id, self.id, address)

    # ------------------------------------------------------------------
    # Hashes and state
    # ------------------------------------------------------------------

    @property
    def initial_hash(self) -> Binary:
        return self._id_bytes.hash()

    @property
    def initial_state(self) -> Binary:
        return self._id_bytes.reversed().hash()

    @property
    def _base_hash(self) -> Binary:
        return self.partial.hash if self.partial is not None else self.initial_hash

    @property
    def _base_state(self) -> Binary:
        return self.partial.state if self.partial is not None else self.initial_state

    @property
    def latest_hash(self) -> Binary:
        return self.events[-1].hash if self.events else self._base_hash

    def state_at(self, length: int) -> Binary:
        """State after folding in the first *length* events."""
        if length < 0 or length > len(self.events):
            raise ChainStateError("Unable to get state: out of bounds", detail={"length": length})

        state = self._base_state
        for event in self.events[:length]:
            state = Binary.concat(state, event.hash).hash()
        return state

    @property
    def state(self) -> Binary:
        if self.events and not self.events[-1].is_signed():
            raise ChainStateError("Unable to get state: last event on chain is not signed")
        return self.state_at(len(self.events))

    @property
    def anchor_map(self) -> list[AnchorEntry]:
        """One entry per event: the state before the event and the event hash."""
        entries: list[AnchorEntry] = []
        state = self._base_state
        for index, event in enumerate(self.events):
            if not event.signer_address:
                raise ChainStateError(f"Event {index} is not signed", detail={"index": index})
            entries.append(AnchorEntry(key=state, value=event.hash, signer=event.signer_address))
            state = Binary.concat(state, event.hash).hash()
        return entries

    @property
    def state_anchor(self) -> AnchorEntry:
        """A single entry mapping the current state to the latest hash."""
        signer = self.events[-1].signer_address if self.events else None
        return AnchorEntry(key=self.state, value=self.latest_hash, signer=signer)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, item: Event | EventChain) -> "EventChain":
        if self.events and not self.events[-1].is_signed():
            raise ChainStateError("Unable to add event: last event on chain is not signed")

        if isinstance(item, EventChain):
            self.add_chain(item)
        else:
            self.add_event(item)
        return self

    def add_event(self, event: Event) -> None:
        latest = self.latest_hash
        if event.previous is None:
            event.previous = latest

        if event.previous != latest:
            raise ChainLinkageError(
                f"Event doesn't fit onto the chain: previous {event.previous.to_hex()} "
                f"does not match {latest.to_hex()}",
                detail={"chain_id": self.id, "previous": event.previous.to_hex(), "expected": latest.to_hex()},
            )

        event.network_id = self.network_id
        event.version = self.version
        self.events.append(event)
        log.debug("event_chain.event_added", chain_id=self.id, index=len(self.events) - 1)

    def add_chain(self, other: EventChain) -> None:
        """Merge *other*'s events into this chain.

        Events both chains hold must hash the same, otherwise
        :class:`MergeConflict` is raised before anything is appended.
        """
        if other.id != self.id:
            raise ChainLinkageError(
                f"Chain id mismatch: unable to merge {other.id} into {self.id}",
                detail={"chain_id": self.id, "other_id": other.id},
            )

        self_start, other_start = self._merge_offsets(other)
        incoming = other.events[other_start:]
        overlap = max(0, min(len(incoming), len(self.events) - self_start))

        for offset, event in enumerate(incoming[:overlap]):
            position = self_start + offset
            existing = self.events[position]
            if existing.hash != event.hash:
                log.warning(
                    "event_chain.merge_conflict",
                    chain_id=self.id,
                    position=position,
                    event_hash=existing.hash.to_hex(),
                    other_hash=event.hash.to_hex(),
                )
                raise MergeConflict(self, existing, event, position=position)

        for event in incoming[overlap:]:
            self.add_event(event)

        log.info("event_chain.merged", chain_id=self.id, added=len(incoming) - overlap, total=len(self.events))

    def _merge_offsets(self, other: EventChain) -> tuple[int, int]:
        """Positions in (self, other) from which the two chains line up."""
        if other._base_hash == self._base_hash:
            return 0, 0

        if other.partial is not None:
            for index, event in enumerate(self.events):
                if event.hash == other.partial.hash:
                    return index + 1, 0

        if self.partial is not None:
            for index, event in enumerate(other.events):
                if event.hash == self.partial.hash:
                    return 0, index + 1

        raise ChainLinkageError(
            f"Events don't fit onto this event chain: event {other._base_hash.to_hex()} not found",
            detail={"chain_id": self.id, "hash": other._base_hash.to_hex()},
        )

    def has(self, item: Event | bytes | str) -> bool:
        try:
            target = self._hash_of(item)
        except (IncompleteEventError, EncodingError, ValueError):
            return False
        return any(self._safe_hash(event) == target for event in self.events)

    @staticmethod
    def _hash_of(item: Event | bytes | str) -> Binary:
        if isinstance(item, Event):
            return item.hash
        if isinstance(item, str):
            return Binary.from_hex(item)
        return Binary(item)

    @staticmethod
    def _safe_hash(event: Event) -> Binary | None:
        try:
            return event.hash
        except (IncompleteEventError, EncodingError):
            return None

    # ------------------------------------------------------------------
    # Slicing
    # ------------------------------------------------------------------

    def _index_of(self, item: Event | bytes | str) -> int:
        target = self._hash_of(item)
        for index, event in enumerate(self.events):
            if self._safe_hash(event) == target:
                return index
        raise ChainStateError(f"Event {target.to_hex()} is not part of this event chain")

    def starting_with(self, item: Event | bytes | str) -> "EventChain":
        """The chain from *item* (inclusive) onwards."""
        return self._slice(self._index_of(item))

    def starting_after(self, item: Event | bytes | str) -> "EventChain":
        """The chain after *item* (exclusive)."""
        return self._slice(self._index_of(item) + 1)

    def _slice(self, cut: int) -> "EventChain":
        if cut == 0:
            return self

        chain = EventChain(self.id)
        chain.partial = PartialHeader(hash=self.events[cut - 1].hash, state=self.state_at(cut))
        chain.events = list(self.events[cut:])
        log.debug("event_chain.sliced", chain_id=self.id, cut=cut, events=len(chain.events))
        return chain

    def is_partial(self) -> bool:
        return self.partial is not None

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def is_signed(self) -> bool:
        return all(event.is_signed() for event in self.events)

    async def validate(self, verify: VerifyFn) -> None:
        """Check signatures, hashes, linkage and the genesis signer.

        Raises:
            ChainValidationError: Empty chain, unsigned event or wrong genesis signer.
            HashMismatchError: An event hash does not match its content.
            SignatureError: A signature does not verify.
            ChainLinkageError: An event does not link to its predecessor.
        """
        try:
            await self._validate(verify)
        except (ChainValidationError, ChainLinkageError) as exc:
            log.warning("event_chain.validation_failed", chain_id=self.id, code=exc.code, reason=exc.message)
            raise

    async def _validate(self, verify: VerifyFn) -> None:
        if not self.events:
            raise ChainValidationError("No events on event chain", detail={"chain_id": self.id})

        expected = self._base_hash
        for index, event in enumerate(self.events):
            if not event.is_signed():
                raise ChainValidationError(
                    f"Event {index} ({_describe(event)}) is not signed", detail={"index": index}
                )
            if not event.verify_hash():
                raise HashMismatchError(f"Invalid hash of event {_describe(event)}", detail={"index": index})
            if not await event.verify_signature(verify):
                raise SignatureError(
                    f"Invalid signature of event {event.hash.to_hex()}",
                    detail={"index": index, "signer": event.signer_address},
                )
            if event.previous != expected:
                raise ChainLinkageError(
                    f"Event {event.hash.to_hex()} doesn't fit onto the chain after {expected.to_hex()}",
                    detail={"index": index},
                )
            expected = event.hash

        genesis = self.events[0]
        if genesis.previous == self.initial_hash and not validate_id(
            GENESIS_ID_PREFIX, self.network_id, self.id, genesis.signer_address
        ):
            raise ChainValidationError(
                "Genesis event is not signed by chain creator",
                detail={"chain_id": self.id, "signer": genesis.signer_address},
            )

        log.debug("event_chain.validated", chain_id=self.id, events=len(self.events))

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_binary(self) -> bytes:
        """``version ‖ id ‖ partial flag [‖ hash ‖ state] ‖ count ‖ (length ‖ event)*``."""
        if len(self.events) > MAX_UINT16:
            raise EncodingTooLargeError(
                "Too many events: exceeds uint16", field="events", size=len(self.events), limit=MAX_UINT16
            )

        parts: list[bytes] = [bytes([self.version]), self._id_bytes]
        if self.partial is not None:
            parts += [b"\x01", self.partial.hash, self.partial.state]
        else:
            parts.append(b"\x00")

        parts.append(Binary.from_uint16(len(self.events)))
        for event in self.events:
            encoded = event.to_binary()
            parts += [Binary.from_uint32(len(encoded)), encoded]
        return Binary.concat(*parts)

    @classmethod
    def from_binary(cls, data: bytes) -> "EventChain":
        """Parse :meth:`to_binary` output.

        Canonical event encodings carry no signatures: the chain keeps every
        event hash, but its events are unsigned.
        """
        if len(data) < _HEADER_LENGTH + 2:
            raise ParseError("Invalid event chain binary: too short", field="header", offset=0)

        version = data[0]
        if version not in SUPPORTED_VERSIONS:
            raise ParseError(f"Event chain binary version {version} not supported", field="version", offset=0)

        offset = 1
        try:
            chain = cls(Binary(data[offset : offset + ID_LENGTH]).to_hex())
        except InvalidIdentifierError as exc:
            raise ParseError(f"Invalid event chain binary: {exc.message}", field="id", offset=offset, cause=exc) from exc
        offset += ID_LENGTH

        flag = data[offset]
        offset += 1
        if flag == 1:
            if offset + 2 * HASH_LENGTH > len(data):
                raise ParseError(
                    "Invalid event chain binary: partial header out of bounds", field="partial", offset=offset
                )
            chain.partial = PartialHeader(
                hash=Binary(data[offset : offset + HASH_LENGTH]),
                state=Binary(data[offset + HASH_LENGTH : offset + 2 * HASH_LENGTH]),
            )
            offset += 2 * HASH_LENGTH
        elif flag != 0:
            raise ParseError(f"Invalid event chain binary: unknown partial flag {flag}", field="partial", offset=offset - 1)

        if offset + 2 > len(data):
            raise ParseError("Invalid event chain binary: event count out of bounds", field="count", offset=offset)
        (count,) = struct.unpack_from(">H", data, offset)
        offset += 2

        for index in range(count):
            if offset + 4 > len(data):
                raise ParseError(
                    f"Invalid event chain binary: event {index} length out of bounds", field="event", offset=offset
                )
            (length,) = struct.unpack_from(">I", data, offset)
            offset += 4
            if offset + length > len(data):
                raise ParseError(
                    f"Invalid event chain binary: event {index} out of bounds", field="event", offset=offset
                )
            chain.add_event(Event.from_binary(bytes(data[offset : offset + length])))
            offset += length

        if offset != len(data):
            raise ParseError("Invalid event chain binary: trailing bytes", field="chain", offset=offset)
        return chain

    def to_json(self) -> dict[str, Any]:
        events: list[dict[str, Any]] = []
        if self.partial is not None:
            events.append({"hash": self.partial.hash.to_hex(), "state": self.partial.state.to_hex()})
        events.extend(event.to_json() for event in self.events)
        return {"id": self.id, "events": events}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "EventChain":
        try:
            chain = cls(data["id"])
            entries = list(data["events"])
            if entries and "state" in entries[0] and "mediaType" not in entries[0]:
                header = entries.pop(0)
                chain.partial = PartialHeader(hash=Binary.from_hex(header["hash"]), state=Binary.from_hex(header["state"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(f"Failed to create event chain from JSON: {exc}", cause=exc) from exc

        for entry in entries:
            chain.add_event(Event.from_json(entry))
        return chain

    @classmethod
    def from_(cls, data: bytes | Mapping[str, Any]) -> "EventChain":
        """Deserialize from either the binary or the JSON form."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            return cls.from_binary(bytes(data))
        return cls.from_json(data)


__all__ = ["EventChain"]
