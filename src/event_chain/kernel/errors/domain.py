"""Domain errors – encoding, identifier and chain invariant violations."""

from __future__ import annotations

from typing import Any

from event_chain.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when an event or chain invariant is violated."""

    default_code = "domain_error"


class EncodingError(DomainError):
    """A payload cannot be encoded with the requested media type."""

    default_code = "encoding_error"


class EncodingTooLargeError(EncodingError):
    """A length-prefixed field does not fit its length prefix."""

    default_code = "encoding_too_large"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        size: int | None = None,
        limit: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.size = size
        self.limit = limit


class IncompleteEventError(DomainError):
    """An event is missing fields required for encoding or signing."""

    default_code = "incomplete_event"


class InvalidIdentifierError(DomainError):
    """A chain identifier is malformed or fails its checksum."""

    default_code = "invalid_identifier"


class ChainStateError(DomainError):
    """The chain is not in a state that allows the requested operation."""

    default_code = "chain_state_error"


class ChainLinkageError(DomainError):
    """An event's ``previous`` does not match the expected predecessor."""

    default_code = "chain_linkage_error"


class ChainValidationError(DomainError):
    """Full validation of an event chain failed."""

    default_code = "chain_validation_error"


class SignatureError(ChainValidationError):
    """An event signature does not verify against its signer address."""

    default_code = "invalid_signature"


class HashMismatchError(ChainValidationError):
    """An event's stored hash differs from the hash of its content."""

    default_code = "hash_mismatch"


class ConflictError(DomainError):
    """The operation conflicts with existing state."""

    default_code = "conflict"


__all__ = [
    "ChainLinkageError",
    "ChainStateError",
    "ChainValidationError",
    "ConflictError",
    "DomainError",
    "EncodingError",
    "EncodingTooLargeError",
    "HashMismatchError",
    "IncompleteEventError",
    "InvalidIdentifierError",
    "SignatureError",
]
