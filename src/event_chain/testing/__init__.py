"""Testing support – fakes, fixtures and generators.

Import in your ``conftest.py``::

    pytest_plugins = ["event_chain.testing.fixtures"]
"""

from event_chain.testing.fakes import (
    FakeClock,
    FakeWalletClient,
    FixedRandomSource,
    StepClock,
)
from event_chain.testing.generators import (
    json_payload_strategy,
    media_type_strategy,
    network_id_strategy,
    nonce_strategy,
    payload_strategy,
)

__all__ = [
    "FakeClock",
    "FakeWalletClient",
    "FixedRandomSource",
    "StepClock",
    "json_payload_strategy",
    "media_type_strategy",
    "network_id_strategy",
    "nonce_strategy",
    "payload_strategy",
]
