"""Application event sourcing – EventSourcedAggregate base class."""

from __future__ import annotations

import abc
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ledgerkit.application.event_sourcing.snapshot import Snapshot
from ledgerkit.application.event_sourcing.stored_event import StoredEvent
from ledgerkit.kernel.ddd.domain_event import DomainEvent
from ledgerkit.kernel.ddd.entity import Entity
from ledgerkit.kernel.ddd.invariant import Invariant
from ledgerkit.kernel.errors import CorruptHistoryError
from ledgerkit.kernel.types.ids import EntityId
from ledgerkit.observability.logging import get_logger

_log = get_logger(__name__)

Mutator = Callable[[Any], None]


class EventSourcedAggregate(Entity, abc.ABC):
    """Aggregate root whose state is derived solely from its event history.

    ``version`` counts committed events applied to this instance.  New
    business operations call :meth:`_apply_change`, which mutates state
    immediately and buffers the event as uncommitted until the repository
    calls :meth:`mark_committed`.

    Subclasses supply:

    * :meth:`_mutators` – an explicit, exhaustive table from event class to
      the handler that applies it.  An event missing from the table raises
      :class:`CorruptHistoryError`.
    * :meth:`to_snapshot` / :meth:`_restore` – materialise and reinstate state.

    Example::

        class Counter(EventSourcedAggregate):
            def __init__(self, id: EntityId) -> None:
                super().__init__(id)
                self.value = 0

            def _mutators(self) -> Mapping[type[DomainEvent], Mutator]:
                return {Incremented: self._on_incremented}

            def _on_incremented(self, event: Incremented) -> None:
                self.value += event.by
    """

    def __init__(self, id: EntityId) -> None:  # noqa: A002
        super().__init__(id)
        self._version = 0
        self._uncommitted: list[DomainEvent] = []
        self._dispatch: Mapping[type[DomainEvent], Mutator] | None = None

    # ------------------------------------------------------------------
    # Subclass contract
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def _mutators(self) -> Mapping[type[DomainEvent], Mutator]:
        """Return the event-class → handler dispatch table."""

    @abc.abstractmethod
    def to_snapshot(self) -> Any:
        """Return a materialisation of the current state."""

    @abc.abstractmethod
    def _restore(self, data: Any) -> None:
        """Reinstate state from data produced by :meth:`to_snapshot`."""

    # ------------------------------------------------------------------
    # Replay / mutation machine
    # ------------------------------------------------------------------

    def load_from_history(self, events: Iterable[StoredEvent | DomainEvent]) -> None:
        """Apply historical events in order; each one advances ``version``.

        Never buffers anything as uncommitted.
        """
        for event in events:
            payload = event.payload if isinstance(event, StoredEvent) else event
            self._apply(payload)
            self._version += 1

    def restore_snapshot(self, snapshot: Snapshot) -> None:
        """Seed state from *snapshot* and set ``version`` to its version."""
        self._restore(snapshot.data)
        self._version = snapshot.version

    def _apply_change(self, event: DomainEvent) -> None:
        """Apply a new event immediately and buffer it for the next commit."""
        Invariant.not_none(event, "event")
        self._apply(event)
        self._uncommitted.append(event)

    def _apply(self, event: DomainEvent) -> None:
        if self._dispatch is None:
            self._dispatch = self._mutators()
        mutator = self._dispatch.get(type(event))
        if mutator is None:
            _log.error(
                "corrupt_history",
                aggregate_type=self.aggregate_type(),
                aggregate_id=str(self.id),
                event_type=getattr(event, "event_type", type(event).__name__),
                version=self._version,
            )
            raise CorruptHistoryError(
                self.aggregate_type(),
                getattr(event, "event_type", type(event).__name__),
                aggregate_id=str(self.id),
            )
        mutator(event)

    def mark_committed(self) -> None:
        """Advance ``version`` past the buffered events and clear the buffer."""
        self._version += len(self._uncommitted)
        self._uncommitted.clear()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def version(self) -> int:
        return self._version

    @property
    def expected_version(self) -> int:
        """Optimistic-concurrency token passed to ``EventLog.append``."""
        return self._version

    @property
    def uncommitted_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._uncommitted)

    @property
    def has_uncommitted_events(self) -> bool:
        return bool(self._uncommitted)

    @classmethod
    def aggregate_type(cls) -> str:
        return cls.__name__

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"{type(self).__name__}(id={str(self.id)!r}, version={self._version}, "
            f"uncommitted={len(self._uncommitted)})"
        )


__all__ = ["EventSourcedAggregate", "Mutator"]
