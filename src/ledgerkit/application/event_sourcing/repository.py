"""Application event sourcing – EventSourcedRepository."""

from __future__ import annotations

import abc
from datetime import datetime
from typing import Generic, TypeVar

from ledgerkit.application.event_sourcing.aggregate import EventSourcedAggregate
from ledgerkit.application.event_sourcing.policy import SnapshotPolicy
from ledgerkit.application.event_sourcing.snapshot import SnapshotCache
from ledgerkit.application.event_sourcing.store import EventLog
from ledgerkit.application.event_sourcing.stored_event import StoredEvent
from ledgerkit.kernel.ddd.invariant import Invariant
from ledgerkit.kernel.errors import NotFoundError
from ledgerkit.kernel.types.ids import EntityId
from ledgerkit.observability.logging import get_logger

T = TypeVar("T", bound=EventSourcedAggregate)

_log = get_logger(__name__)


class EventSourcedRepository(Generic[T], abc.ABC):
    """Generic repository for event-sourced aggregates.

    Instances returned by :meth:`load` are rebuilt on every call and are not
    cached; the event log and snapshot cache own all persisted records.

    Subclasses must implement :meth:`_aggregate_class` and
    :meth:`_create_empty`.

    Example::

        class CounterRepository(EventSourcedRepository[Counter]):
            def _aggregate_class(self) -> type[Counter]:
                return Counter

            def _create_empty(self, agg_id: str) -> Counter:
                return Counter(EntityId(agg_id))

        repo = CounterRepository(InMemoryEventLog(), InMemorySnapshotCache())
        counter = repo.load("counter-1")
        counter.increment()
        repo.save(counter)
    """

    def __init__(
        self,
        events: EventLog,
        snapshots: SnapshotCache,
        policy: SnapshotPolicy | None = None,
    ) -> None:
        self._events = events
        self._snapshots = snapshots
        self._policy = policy or SnapshotPolicy()

    @abc.abstractmethod
    def _aggregate_class(self) -> type[T]:
        """Return the concrete aggregate type."""

    @abc.abstractmethod
    def _create_empty(self, agg_id: str) -> T:
        """Return a blank aggregate instance with *agg_id*."""

    @property
    def event_log(self) -> EventLog:
        return self._events

    @property
    def snapshot_cache(self) -> SnapshotCache:
        return self._snapshots

    # ------------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------------

    def load(self, agg_id: EntityId | str) -> T | None:
        """Rebuild an aggregate from its newest snapshot plus the tail events.

        Returns ``None`` when neither a snapshot nor any event exists.
        """
        key = _key(agg_id)
        if not key:
            return None

        snapshot = self._snapshots.latest(key)
        agg = self._create_empty(key)
        from_version = 0
        if snapshot is not None:
            agg.restore_snapshot(snapshot)
            from_version = snapshot.version

        tail = self._events.events_for(key, from_version)
        if snapshot is None and not tail:
            return None

        agg.load_from_history(tail)
        _log.debug(
            "aggregate_loaded",
            aggregate_type=self._aggregate_class().__name__,
            aggregate_id=key,
            snapshot_version=from_version if snapshot is not None else None,
            replayed=len(tail),
            version=agg.version,
        )
        return agg

    def get_or_raise(self, agg_id: EntityId | str) -> T:
        """Like :meth:`load` but raises :class:`NotFoundError` when absent."""
        agg = self.load(agg_id)
        if agg is None:
            raise NotFoundError(self._aggregate_class().__name__, _key(agg_id))
        return agg

    def save(self, agg: T) -> None:
        """Append pending events under the aggregate's expected version.

        :class:`~ledgerkit.kernel.errors.ConcurrencyConflictError` propagates
        unchanged; reloading and retrying is the caller's decision.
        """
        Invariant.not_none(agg, "aggregate")
        if not agg.has_uncommitted_events:
            return

        key = str(agg.id)
        written = self._events.append(key, agg.uncommitted_events, agg.expected_version)
        agg.mark_committed()
        _log.debug(
            "aggregate_saved",
            aggregate_type=type(agg).__name__,
            aggregate_id=key,
            appended=len(written),
            version=agg.version,
        )
        self._consider_snapshot(agg)

    def _consider_snapshot(self, agg: T) -> None:
        key = str(agg.id)
        last = self._snapshots.latest(key)
        if self._policy.should_snapshot(agg.version, last):
            self._snapshots.save(key, agg.to_snapshot(), agg.version)
            _log.info(
                "snapshot_taken",
                aggregate_type=type(agg).__name__,
                aggregate_id=key,
                version=agg.version,
            )

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def history_of(self, agg_id: EntityId | str) -> list[StoredEvent]:
        """Full ordered event history, for audit and debugging."""
        return self._events.events_for(_key(agg_id))

    def at_point_in_time(self, agg_id: EntityId | str, timestamp: datetime) -> T | None:
        """Rebuild state from events that occurred at or before *timestamp*.

        Full linear replay; snapshots are not consulted on this path.
        """
        Invariant.aware(timestamp, "timestamp")
        key = _key(agg_id)
        events = [e for e in self._events.events_for(key) if e.occurred_at <= timestamp]
        if not events:
            return None
        agg = self._create_empty(key)
        agg.load_from_history(events)
        return agg

    def event_count(self, agg_id: EntityId | str) -> int:
        return self._events.current_version(_key(agg_id))

    def purge(self, agg_id: EntityId | str) -> None:
        """Administrative reset: drop the aggregate's events and snapshots."""
        key = _key(agg_id)
        self._events.clear_aggregate(key)
        self._snapshots.clear_aggregate(key)
        _log.info("aggregate_purged", aggregate_id=key)


def _key(agg_id: EntityId | str | None) -> str:
    if agg_id is None:
        return ""
    return str(agg_id).strip()


__all__ = ["EventSourcedRepository"]
