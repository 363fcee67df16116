"""Testing fixtures – pytest fixtures for signers and clocks."""
try:
    import pytest  # noqa: F401

    from event_chain.testing.fixtures.clock import fake_clock, step_clock
    from event_chain.testing.fixtures.signers import alice, bob, verifier

except ImportError:
    pass

__all__ = ["alice", "bob", "fake_clock", "step_clock", "verifier"]
