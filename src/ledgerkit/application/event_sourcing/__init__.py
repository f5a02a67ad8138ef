"""Application – Event Sourcing."""

from ledgerkit.application.event_sourcing.aggregate import EventSourcedAggregate, Mutator
from ledgerkit.application.event_sourcing.policy import DEFAULT_SNAPSHOT_THRESHOLD, SnapshotPolicy
from ledgerkit.application.event_sourcing.repository import EventSourcedRepository
from ledgerkit.application.event_sourcing.snapshot import (
    DEFAULT_KEEP_COUNT,
    InMemorySnapshotCache,
    Snapshot,
    SnapshotCache,
)
from ledgerkit.application.event_sourcing.store import EventKind, EventLog, InMemoryEventLog
from ledgerkit.application.event_sourcing.stored_event import StoredEvent

__all__ = [
    "DEFAULT_KEEP_COUNT",
    "DEFAULT_SNAPSHOT_THRESHOLD",
    "EventKind",
    "EventLog",
    "EventSourcedAggregate",
    "EventSourcedRepository",
    "InMemoryEventLog",
    "InMemorySnapshotCache",
    "Mutator",
    "Snapshot",
    "SnapshotCache",
    "SnapshotPolicy",
    "StoredEvent",
]
