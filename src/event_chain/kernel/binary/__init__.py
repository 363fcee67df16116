"""Kernel binary – byte-string value type."""
from event_chain.kernel.binary.binary import Binary

__all__ = ["Binary"]
