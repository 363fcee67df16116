"""Kernel – framework-agnostic building blocks."""

from event_chain.kernel.binary import Binary
from event_chain.kernel.errors import (
    ApplicationError,
    BaseError,
    ChainLinkageError,
    ChainStateError,
    ChainValidationError,
    ConflictError,
    DomainError,
    EncodingError,
    EncodingTooLargeError,
    HashMismatchError,
    IncompleteEventError,
    InfrastructureError,
    InvalidIdentifierError,
    ParseError,
    SignatureError,
    SignerUnavailableError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "Binary",
    "ChainLinkageError",
    "ChainStateError",
    "ChainValidationError",
    "ConflictError",
    "DomainError",
    "EncodingError",
    "EncodingTooLargeError",
    "HashMismatchError",
    "IncompleteEventError",
    "InfrastructureError",
    "InvalidIdentifierError",
    "ParseError",
    "SignatureError",
    "SignerUnavailableError",
]
