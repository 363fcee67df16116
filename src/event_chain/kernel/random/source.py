"""Kernel random – RandomSource protocol + system implementation."""
from __future__ import annotations

import secrets
from typing import Protocol


class RandomSource(Protocol):
    """Port: source of random bytes, injectable for deterministic tests."""

    def token_bytes(self, length: int) -> bytes: ...


class SystemRandomSource:
    """Cryptographically secure bytes from :mod:`secrets`."""

    def token_bytes(self, length: int) -> bytes:
        return secrets.token_bytes(length)


__all__ = ["RandomSource", "SystemRandomSource"]
