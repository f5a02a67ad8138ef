"""Unit tests for EventSourcedAggregate."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import pytest
from structlog.testing import capture_logs

from ledgerkit.application.event_sourcing import (
    EventSourcedAggregate,
    InMemoryEventLog,
    Mutator,
    Snapshot,
)
from ledgerkit.kernel.ddd import DomainEvent
from ledgerkit.kernel.errors import CorruptHistoryError
from ledgerkit.kernel.types import EntityId


@dataclasses.dataclass(frozen=True)
class Incremented(DomainEvent):
    by: int


@dataclasses.dataclass(frozen=True)
class Renamed(DomainEvent):
    name: str


class Counter(EventSourcedAggregate):
    def __init__(self, id: EntityId) -> None:  # noqa: A002
        super().__init__(id)
        self.value = 0

    def increment(self, by: int = 1) -> None:
        self._apply_change(Incremented(by=by))

    def _mutators(self) -> Mapping[type[DomainEvent], Mutator]:
        return {Incremented: self._on_incremented}

    def _on_incremented(self, event: Incremented) -> None:
        self.value += event.by

    def to_snapshot(self) -> Any:
        return {"value": self.value}

    def _restore(self, data: Any) -> None:
        self.value = data["value"]


def _counter() -> Counter:
    return Counter(EntityId("counter-1"))


# ---------------------------------------------------------------------------
# Mutation and commit
# ---------------------------------------------------------------------------


class TestApplyChange:
    def test_applies_immediately_and_buffers(self) -> None:
        c = _counter()
        c.increment(2)
        c.increment(3)
        assert c.value == 5
        assert c.version == 0
        assert c.has_uncommitted_events
        assert [e.by for e in c.uncommitted_events] == [2, 3]

    def test_mark_committed_advances_version(self) -> None:
        c = _counter()
        c.increment()
        c.increment()
        c.mark_committed()
        assert c.version == 2
        assert c.expected_version == 2
        assert c.uncommitted_events == ()

    def test_uncommitted_events_is_a_copy(self) -> None:
        c = _counter()
        c.increment()
        assert isinstance(c.uncommitted_events, tuple)
        assert len(c.uncommitted_events) == 1

    def test_aggregate_type(self) -> None:
        assert Counter.aggregate_type() == "Counter"


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------


class TestReplay:
    def test_load_from_domain_events(self) -> None:
        c = _counter()
        c.load_from_history([Incremented(by=1), Incremented(by=4)])
        assert c.value == 5
        assert c.version == 2
        assert not c.has_uncommitted_events

    def test_load_from_stored_events(self, event_log: InMemoryEventLog) -> None:
        event_log.append("counter-1", [Incremented(by=2), Incremented(by=2)], 0)
        c = _counter()
        c.load_from_history(event_log.events_for("counter-1"))
        assert c.value == 4
        assert c.version == 2

    def test_unknown_event_is_corrupt_history(self) -> None:
        c = _counter()
        with capture_logs() as logs, pytest.raises(CorruptHistoryError) as exc_info:
            c.load_from_history([Incremented(by=1), Renamed(name="x")])
        assert exc_info.value.code == "corrupt_history"
        assert "Renamed" in exc_info.value.message
        assert logs[0]["event"] == "corrupt_history"
        assert logs[0]["log_level"] == "error"

    def test_unknown_event_rejected_for_new_changes(self) -> None:
        c = _counter()
        with pytest.raises(CorruptHistoryError):
            c._apply_change(Renamed(name="x"))
        assert not c.has_uncommitted_events


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


class TestSnapshotRestore:
    def test_restore_sets_state_and_version(self) -> None:
        snap = Snapshot(
            aggregate_id="counter-1",
            data={"value": 42},
            version=10,
            created_at=datetime(2026, 1, 1, tzinfo=UTC),
        )
        c = _counter()
        c.restore_snapshot(snap)
        assert c.value == 42
        assert c.version == 10

    def test_restore_then_replay_tail(self) -> None:
        snap = Snapshot(
            aggregate_id="counter-1",
            data={"value": 10},
            version=10,
            created_at=datetime(2026, 1, 1, tzinfo=UTC),
        )
        c = _counter()
        c.restore_snapshot(snap)
        c.load_from_history([Incremented(by=1)] * 5)
        assert c.value == 15
        assert c.version == 15
