"""Events – signed events, chain ids and the event chain itself."""
from event_chain.events.chain import EventChain
from event_chain.events.conflict import MergeConflict
from event_chain.events.constants import (
    DERIVED_ID_PREFIX,
    EVENT_CHAIN_V3,
    GENESIS_ID_PREFIX,
    ID_LENGTH,
    MEDIA_TYPE_BINARY,
    MEDIA_TYPE_JSON,
    MEDIA_TYPE_TEXT,
    SUPPORTED_VERSIONS,
)
from event_chain.events.event import Event
from event_chain.events.identifier import build_id, create_nonce, decode_id, validate_id
from event_chain.events.payload import decode_payload, encode_payload
from event_chain.events.types import AnchorEntry, Attachment, PartialHeader, SignData

__all__ = [
    "AnchorEntry",
    "Attachment",
    "DERIVED_ID_PREFIX",
    "EVENT_CHAIN_V3",
    "Event",
    "EventChain",
    "GENESIS_ID_PREFIX",
    "ID_LENGTH",
    "MEDIA_TYPE_BINARY",
    "MEDIA_TYPE_JSON",
    "MEDIA_TYPE_TEXT",
    "MergeConflict",
    "PartialHeader",
    "SUPPORTED_VERSIONS",
    "SignData",
    "build_id",
    "create_nonce",
    "decode_id",
    "decode_payload",
    "encode_payload",
    "validate_id",
]
