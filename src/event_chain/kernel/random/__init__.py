"""Kernel random – RandomSource port."""
from event_chain.kernel.random.source import RandomSource, SystemRandomSource

__all__ = ["RandomSource", "SystemRandomSource"]
