"""Testing generators – property-based testing strategies."""
from event_chain.testing.generators.strategies import (
    json_payload_strategy,
    media_type_strategy,
    network_id_strategy,
    nonce_strategy,
    payload_strategy,
)

__all__ = [
    "json_payload_strategy",
    "media_type_strategy",
    "network_id_strategy",
    "nonce_strategy",
    "payload_strategy",
]
