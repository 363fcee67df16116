"""MergeConflict – two chains disagree on the event at one position."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from event_chain.kernel.errors import ConflictError

if TYPE_CHECKING:
    from event_chain.events.chain import EventChain
    from event_chain.events.event import Event


class MergeConflict(ConflictError):
    """Raised by :meth:`EventChain.add` when an incoming event replaces a different one.

    Attributes:
        chain: The chain being merged into (left untouched).
        event: The event already at ``position``.
        other: The incoming event at the same position.
        position: Index in ``chain.events``.
    """

    default_code = "merge_conflict"

    def __init__(
        self,
        chain: EventChain,
        event: Event,
        other: Event,
        *,
        position: int | None = None,
        **kwargs: Any,
    ) -> None:
        event_hash = event.hash.to_hex()
        other_hash = other.hash.to_hex()
        super().__init__(
            f"Merge conflict on event chain {chain.id}: event {other_hash} conflicts with {event_hash}",
            detail={
                "chain_id": chain.id,
                "position": position,
                "event_hash": event_hash,
                "other_hash": other_hash,
            },
            **kwargs,
        )
        self.chain = chain
        self.event = event
        self.other = other
        self.position = position


__all__ = ["MergeConflict"]
