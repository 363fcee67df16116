"""Infrastructure errors – wire format and signing backend failures."""

from __future__ import annotations

from typing import Any

from event_chain.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O or wire-format failure that is not a domain rule violation."""

    default_code = "infrastructure_error"


class ParseError(InfrastructureError):
    """Failed to deserialize an event or chain from its binary or JSON form.

    ``field`` names the element being read and ``offset`` the byte position
    (binary input only) at which parsing stopped.
    """

    default_code = "parse_error"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        offset: int | None = None,
        **kwargs: Any,
    ) -> None:
        detail = kwargs.pop("detail", None) or {}
        if field is not None:
            detail.setdefault("field", field)
        if offset is not None:
            detail.setdefault("offset", offset)
        super().__init__(message, detail=detail, **kwargs)
        self.field = field
        self.offset = offset


class SignerUnavailableError(InfrastructureError):
    """The signing backend cannot produce a signature, e.g. no wallet account is connected."""

    default_code = "signer_unavailable"


__all__ = ["InfrastructureError", "ParseError", "SignerUnavailableError"]
