"""Event chain constants – versions, identifier prefixes, media types and field widths."""
from __future__ import annotations

EVENT_CHAIN_V3 = 0x42
SUPPORTED_VERSIONS: frozenset[int] = frozenset({EVENT_CHAIN_V3})

GENESIS_ID_PREFIX = EVENT_CHAIN_V3
DERIVED_ID_PREFIX = 0x50

MEDIA_TYPE_BINARY = "application/octet-stream"
MEDIA_TYPE_TEXT = "text/plain"
MEDIA_TYPE_JSON = "application/json"

SIGN_DOMAIN_NAME = "EqtyEvent"

HASH_LENGTH = 32
ADDRESS_TEXT_LENGTH = 42  # "0x" + 40 hex chars
NONCE_LENGTH = 20
GROUP_HASH_LENGTH = 20
CHECKSUM_LENGTH = 4
NETWORK_ID_LENGTH = 4

# prefix ‖ network ‖ nonce ‖ keccak(group)[:20]
ID_RAW_LENGTH = 1 + NETWORK_ID_LENGTH + NONCE_LENGTH + GROUP_HASH_LENGTH
ID_LENGTH = ID_RAW_LENGTH + CHECKSUM_LENGTH

MAX_UINT16 = 0xFFFF
MAX_UINT32 = 0xFFFFFFFF

# previous ‖ signer ‖ timestamp ‖ media type length ‖ data length
EVENT_BINARY_MIN_LENGTH = HASH_LENGTH + ADDRESS_TEXT_LENGTH + 4 + 2 + 4

__all__ = [
    "ADDRESS_TEXT_LENGTH",
    "CHECKSUM_LENGTH",
    "DERIVED_ID_PREFIX",
    "EVENT_BINARY_MIN_LENGTH",
    "EVENT_CHAIN_V3",
    "GENESIS_ID_PREFIX",
    "GROUP_HASH_LENGTH",
    "HASH_LENGTH",
    "ID_LENGTH",
    "ID_RAW_LENGTH",
    "MAX_UINT16",
    "MAX_UINT32",
    "MEDIA_TYPE_BINARY",
    "MEDIA_TYPE_JSON",
    "MEDIA_TYPE_TEXT",
    "NETWORK_ID_LENGTH",
    "NONCE_LENGTH",
    "SIGN_DOMAIN_NAME",
    "SUPPORTED_VERSIONS",
]
