"""Application event sourcing – StoredEvent."""

from __future__ import annotations

import dataclasses
from datetime import datetime

from ledgerkit.kernel.ddd.domain_event import DomainEvent


@dataclasses.dataclass(frozen=True)
class StoredEvent:
    """An event as recorded by the event log.

    Two orderings coexist: ``version`` orders one aggregate's history and is
    the optimistic-concurrency token; ``global_sequence`` orders every event
    across all aggregates for audit and export.
    """

    global_sequence: int
    """Process-wide, strictly increasing, never reused."""

    aggregate_id: str
    """Identifier of the aggregate this event belongs to."""

    version: int
    """1-based, gapless position within the aggregate's history."""

    event_type: str
    """Kind tag identifying the payload's shape (the event class name)."""

    payload: DomainEvent
    """The kind-specific domain event."""

    stored_at: datetime
    """Wall-clock time at which the log accepted the event."""

    @property
    def occurred_at(self) -> datetime:
        """Business time at which the event happened."""
        return self.payload.occurred_at


__all__ = ["StoredEvent"]
