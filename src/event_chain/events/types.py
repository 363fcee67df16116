"""Event chain value types."""
from __future__ import annotations

import dataclasses
from typing import Any, TypeAlias

from event_chain.kernel.binary import Binary

TypedDataDomain: TypeAlias = dict[str, Any]
TypedDataTypes: TypeAlias = dict[str, list[dict[str, str]]]
TypedDataValue: TypeAlias = dict[str, Any]


@dataclasses.dataclass(frozen=True, slots=True)
class Attachment:
    """Auxiliary payload travelling with an event's JSON form."""

    name: str
    media_type: str
    data: Binary


@dataclasses.dataclass(frozen=True, slots=True)
class PartialHeader:
    """Where a partial chain attaches to the omitted prefix.

    ``hash`` is the tip hash right before the first event of the slice and
    ``state`` the accumulated state hash at that point.
    """

    hash: Binary
    state: Binary


@dataclasses.dataclass(frozen=True, slots=True)
class AnchorEntry:
    """A (key, value) pair for an external key/value integrity ledger."""

    key: Binary
    value: Binary
    signer: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class SignData:
    """EIP-712 typed data: domain, field schema and value map."""

    domain: TypedDataDomain
    types: TypedDataTypes
    value: TypedDataValue

    @property
    def primary_type(self) -> str:
        return next(iter(self.types))


__all__ = [
    "AnchorEntry",
    "Attachment",
    "PartialHeader",
    "SignData",
    "TypedDataDomain",
    "TypedDataTypes",
    "TypedDataValue",
]
