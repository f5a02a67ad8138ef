"""Application event sourcing – EventLog port and InMemoryEventLog."""

from __future__ import annotations

import abc
import threading
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from ledgerkit.application.event_sourcing.stored_event import StoredEvent
from ledgerkit.kernel.ddd.domain_event import DomainEvent
from ledgerkit.kernel.ddd.invariant import Invariant
from ledgerkit.kernel.errors import ConcurrencyConflictError, ValidationError
from ledgerkit.kernel.time import Clock, SystemClock
from ledgerkit.observability.logging import get_logger

_log = get_logger(__name__)

EventKind = type[DomainEvent] | str


class EventLog(abc.ABC):
    """Port – append-only event log.

    ``expected_version`` is used for **optimistic concurrency control**:

    - Pass ``0`` when creating a new aggregate (no events exist yet).
    - Pass the aggregate's committed version when appending to it.
    - The log raises :class:`ConcurrencyConflictError` if the stored event
      count differs from *expected_version*, and writes nothing.

    A durable backend can replace :class:`InMemoryEventLog` behind this
    interface without changing callers.
    """

    @abc.abstractmethod
    def append(
        self,
        aggregate_id: str,
        events: Sequence[DomainEvent],
        expected_version: int,
    ) -> list[StoredEvent]:
        """Append *events* to *aggregate_id*, enforcing optimistic locking."""

    @abc.abstractmethod
    def events_for(self, aggregate_id: str, from_version: int = 0) -> list[StoredEvent]:
        """Return events for *aggregate_id* with ``version > from_version``."""

    @abc.abstractmethod
    def all_events(self) -> list[StoredEvent]:
        """Return every event, ordered by global sequence."""

    @abc.abstractmethod
    def events_of_kind(self, kind: EventKind) -> list[StoredEvent]:
        """Return events of *kind* (class or name), ordered by global sequence."""

    @abc.abstractmethod
    def events_in_range(self, start: datetime, end: datetime) -> list[StoredEvent]:
        """Return events that occurred within ``[start, end]``, ordered by time."""

    @abc.abstractmethod
    def current_version(self, aggregate_id: str) -> int:
        """Return the number of events stored for *aggregate_id*."""

    @abc.abstractmethod
    def total_event_count(self) -> int:
        """Return the number of events stored across all aggregates."""

    @abc.abstractmethod
    def clear_aggregate(self, aggregate_id: str) -> int:
        """Drop every event of *aggregate_id*; return how many were removed."""


class InMemoryEventLog(EventLog):
    """Process-local :class:`EventLog`.

    Empty at construction, grows monotonically, and is reset only through
    :meth:`clear` / :meth:`clear_aggregate`.  Every operation runs under one
    lock: the version check, sequence assignment and insertion of an append
    form a single critical section, and readers receive copies so they never
    observe a half-written append.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()
        # aggregate_id -> events in version order
        self._streams: dict[str, list[StoredEvent]] = {}
        # every event in global-sequence order
        self._log: list[StoredEvent] = []
        self._sequence = 0

    def append(
        self,
        aggregate_id: str,
        events: Sequence[DomainEvent],
        expected_version: int,
    ) -> list[StoredEvent]:
        Invariant.not_blank(aggregate_id, "aggregate_id")
        Invariant.argument(
            isinstance(expected_version, int) and expected_version >= 0,
            f"expected_version must be a non-negative integer, got {expected_version!r}",
            field="expected_version",
        )
        batch = list(events or ())
        if not batch:
            return []
        for event in batch:
            if not isinstance(event, DomainEvent):
                raise ValidationError(
                    f"Only DomainEvent instances can be appended, got {type(event).__name__}"
                )

        with self._lock:
            stream = self._streams.get(aggregate_id, [])
            actual = len(stream)
            if actual != expected_version:
                _log.warning(
                    "concurrency_conflict",
                    aggregate_id=aggregate_id,
                    expected=expected_version,
                    actual=actual,
                )
                raise ConcurrencyConflictError(aggregate_id, expected_version, actual)

            stored_at = self._clock.now()
            written: list[StoredEvent] = []
            for offset, event in enumerate(batch, start=1):
                self._sequence += 1
                written.append(
                    StoredEvent(
                        global_sequence=self._sequence,
                        aggregate_id=aggregate_id,
                        version=actual + offset,
                        event_type=event.event_type,
                        payload=event,
                        stored_at=stored_at,
                    )
                )
            self._streams[aggregate_id] = stream + written
            self._log.extend(written)

        _log.debug(
            "events_appended",
            aggregate_id=aggregate_id,
            count=len(written),
            version=written[-1].version,
            global_sequence=written[-1].global_sequence,
        )
        return written

    def events_for(self, aggregate_id: str, from_version: int = 0) -> list[StoredEvent]:
        if not aggregate_id or not aggregate_id.strip():
            return []
        with self._lock:
            stream = self._streams.get(aggregate_id, [])
        return [e for e in stream if e.version > from_version]

    def all_events(self) -> list[StoredEvent]:
        with self._lock:
            return list(self._log)

    def events_of_kind(self, kind: EventKind) -> list[StoredEvent]:
        Invariant.not_none(kind, "kind")
        if isinstance(kind, str):
            return [e for e in self.all_events() if e.event_type == kind]
        return [e for e in self.all_events() if isinstance(e.payload, kind)]

    def events_in_range(self, start: datetime, end: datetime) -> list[StoredEvent]:
        Invariant.aware(start, "start")
        Invariant.aware(end, "end")
        Invariant.argument(start <= end, "start must not be after end", field="start")
        hits = [e for e in self.all_events() if start <= e.occurred_at <= end]
        # sorted() is stable, so equal timestamps keep global-sequence order
        return sorted(hits, key=lambda e: e.occurred_at)

    def current_version(self, aggregate_id: str) -> int:
        if not aggregate_id:
            return 0
        with self._lock:
            return len(self._streams.get(aggregate_id, ()))

    def total_event_count(self) -> int:
        with self._lock:
            return len(self._log)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def aggregate_ids(self) -> list[str]:
        """Return the identifiers of every aggregate with stored events."""
        with self._lock:
            return list(self._streams)

    def clear(self) -> None:
        """Drop every event and restart the global sequence."""
        with self._lock:
            self._streams.clear()
            self._log.clear()
            self._sequence = 0
        _log.info("event_log_cleared")

    def clear_aggregate(self, aggregate_id: str) -> int:
        """Drop every event of *aggregate_id*; return how many were removed.

        Global sequence numbers already handed out are not reused.
        """
        if not aggregate_id:
            return 0
        with self._lock:
            removed = self._streams.pop(aggregate_id, [])
            if removed:
                self._log = [e for e in self._log if e.aggregate_id != aggregate_id]
        if removed:
            _log.info("aggregate_events_cleared", aggregate_id=aggregate_id, count=len(removed))
        return len(removed)

    def stats(self) -> dict[str, Any]:
        """Return a point-in-time summary of the log's contents."""
        with self._lock:
            return {
                "total_events": len(self._log),
                "aggregates": len(self._streams),
                "last_sequence": self._sequence,
                "events_per_aggregate": {k: len(v) for k, v in self._streams.items()},
            }


__all__ = ["EventKind", "EventLog", "InMemoryEventLog"]
