"""Testing fakes – deterministic doubles for the clock, randomness and wallets."""
from event_chain.testing.fakes.clock import FakeClock, StepClock
from event_chain.testing.fakes.random import FixedRandomSource
from event_chain.testing.fakes.wallet import FakeWalletAccount, FakeWalletClient
from event_chain.kernel.time import FrozenClock

__all__ = [
    "FakeClock",
    "FakeWalletAccount",
    "FakeWalletClient",
    "FixedRandomSource",
    "FrozenClock",
    "StepClock",
]
