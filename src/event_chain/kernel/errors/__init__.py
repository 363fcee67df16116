"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── EncodingError
    │   │   └── EncodingTooLargeError
    │   ├── IncompleteEventError
    │   ├── InvalidIdentifierError
    │   ├── ChainStateError
    │   ├── ChainLinkageError
    │   ├── ChainValidationError
    │   │   ├── SignatureError
    │   │   └── HashMismatchError
    │   └── ConflictError
    │       └── MergeConflict    (event_chain.events.conflict)
    ├── ApplicationError         (application.py)
    │   └── ConfigError
    │       ├── MissingRequiredSettingError
    │       └── InvalidSettingValueError
    └── InfrastructureError      (infrastructure.py)
        ├── ParseError
        └── SignerUnavailableError
"""

from event_chain.kernel.errors.application import (
    ApplicationError,
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from event_chain.kernel.errors.base import BaseError
from event_chain.kernel.errors.domain import (
    ChainLinkageError,
    ChainStateError,
    ChainValidationError,
    ConflictError,
    DomainError,
    EncodingError,
    EncodingTooLargeError,
    HashMismatchError,
    IncompleteEventError,
    InvalidIdentifierError,
    SignatureError,
)
from event_chain.kernel.errors.infrastructure import InfrastructureError, ParseError, SignerUnavailableError

__all__ = [
    "ApplicationError",
    "BaseError",
    "ChainLinkageError",
    "ChainStateError",
    "ChainValidationError",
    "ConfigError",
    "ConflictError",
    "DomainError",
    "EncodingError",
    "EncodingTooLargeError",
    "HashMismatchError",
    "IncompleteEventError",
    "InfrastructureError",
    "InvalidIdentifierError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "ParseError",
    "SignatureError",
    "SignerUnavailableError",
]
