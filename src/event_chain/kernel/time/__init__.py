"""Kernel time – Clock port + implementations."""
from event_chain.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
