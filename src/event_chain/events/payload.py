"""Payload encoding shared by event data and attachments."""
from __future__ import annotations

import json
from typing import Any

from event_chain.events.constants import MEDIA_TYPE_BINARY, MEDIA_TYPE_JSON, MEDIA_TYPE_TEXT
from event_chain.kernel.binary import Binary
from event_chain.kernel.errors import EncodingError


def encode_payload(payload: Any, media_type: str | None = None) -> tuple[str, Binary]:
    """Return the ``(media_type, data)`` pair for *payload*.

    Bytes default to ``application/octet-stream`` and text to ``text/plain``;
    both accept any explicit media type.  Every other value is serialized as
    compact JSON and may only be labelled ``application/json``.
    """
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return media_type or MEDIA_TYPE_BINARY, Binary(bytes(payload))
    if isinstance(payload, str):
        return media_type or MEDIA_TYPE_TEXT, Binary(payload)

    if media_type and media_type != MEDIA_TYPE_JSON:
        raise EncodingError(f"Unable to encode data as {media_type}", detail={"media_type": media_type})
    try:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Unable to encode data as {MEDIA_TYPE_JSON}: {exc}", cause=exc) from exc
    return MEDIA_TYPE_JSON, Binary(text)


def decode_payload(media_type: str, data: bytes) -> Any:
    """Inverse of :func:`encode_payload` for display: parsed JSON or UTF-8 text."""
    if media_type == MEDIA_TYPE_JSON:
        try:
            return json.loads(bytes(data).decode("utf-8"))
        except ValueError:
            pass
    return bytes(data).decode("utf-8", errors="replace")


__all__ = ["decode_payload", "encode_payload"]
