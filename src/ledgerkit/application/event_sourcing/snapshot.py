"""Application event sourcing – SnapshotCache port and InMemorySnapshotCache."""

from __future__ import annotations

import abc
import bisect
import dataclasses
import threading
from datetime import datetime
from typing import Any

from ledgerkit.kernel.ddd.invariant import Invariant
from ledgerkit.kernel.time import Clock, SystemClock
from ledgerkit.observability.logging import get_logger

_log = get_logger(__name__)

DEFAULT_KEEP_COUNT = 3


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """Materialised aggregate state at a known committed version."""

    aggregate_id: str
    data: Any
    version: int
    created_at: datetime


class SnapshotCache(abc.ABC):
    """Port – store and retrieve aggregate state snapshots.

    Snapshots bound replay cost for long-lived aggregates: a load restores
    the newest snapshot and replays only the events after it.
    """

    @abc.abstractmethod
    def save(self, aggregate_id: str, data: Any, version: int) -> Snapshot:
        """Store a snapshot of *aggregate_id* taken at *version*."""

    @abc.abstractmethod
    def latest(self, aggregate_id: str) -> Snapshot | None:
        """Return the highest-version snapshot, or ``None``."""

    @abc.abstractmethod
    def latest_at_or_before(self, aggregate_id: str, version: int) -> Snapshot | None:
        """Return the highest-version snapshot with ``version <= version``."""

    @abc.abstractmethod
    def trim(self, aggregate_id: str, keep: int) -> None:
        """Retain only the *keep* highest-version snapshots of *aggregate_id*."""

    @abc.abstractmethod
    def clear(self) -> None:
        """Drop every snapshot."""

    @abc.abstractmethod
    def clear_aggregate(self, aggregate_id: str) -> None:
        """Drop every snapshot of *aggregate_id*."""


class InMemorySnapshotCache(SnapshotCache):
    """Process-local :class:`SnapshotCache` with bounded retention.

    Snapshots per aggregate are kept sorted by version.  ``save`` and its
    retention trim run in the same critical section, so a concurrent trim
    can never discard a snapshot that another thread has just written.
    """

    def __init__(self, keep: int = DEFAULT_KEEP_COUNT, clock: Clock | None = None) -> None:
        Invariant.argument(keep >= 1, "keep must be >= 1", field="keep")
        self._keep = keep
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()
        self._snapshots: dict[str, list[Snapshot]] = {}

    @property
    def keep(self) -> int:
        return self._keep

    def save(self, aggregate_id: str, data: Any, version: int) -> Snapshot:
        Invariant.not_blank(aggregate_id, "aggregate_id")
        Invariant.not_none(data, "data")
        Invariant.argument(version >= 0, "version must be >= 0", field="version")

        snapshot = Snapshot(
            aggregate_id=aggregate_id,
            data=data,
            version=version,
            created_at=self._clock.now(),
        )
        with self._lock:
            existing = [s for s in self._snapshots.get(aggregate_id, []) if s.version != version]
            versions = [s.version for s in existing]
            existing.insert(bisect.bisect(versions, version), snapshot)
            self._snapshots[aggregate_id] = existing
            self._trim_locked(aggregate_id, self._keep)

        _log.debug("snapshot_saved", aggregate_id=aggregate_id, version=version)
        return snapshot

    def latest(self, aggregate_id: str) -> Snapshot | None:
        if not aggregate_id:
            return None
        with self._lock:
            snapshots = self._snapshots.get(aggregate_id)
            return snapshots[-1] if snapshots else None

    def latest_at_or_before(self, aggregate_id: str, version: int) -> Snapshot | None:
        if not aggregate_id:
            return None
        with self._lock:
            snapshots = self._snapshots.get(aggregate_id, [])
            for snapshot in reversed(snapshots):
                if snapshot.version <= version:
                    return snapshot
        return None

    def trim(self, aggregate_id: str, keep: int) -> None:
        if not aggregate_id or keep <= 0:
            return
        with self._lock:
            self._trim_locked(aggregate_id, keep)

    def _trim_locked(self, aggregate_id: str, keep: int) -> None:
        snapshots = self._snapshots.get(aggregate_id)
        if snapshots is None or len(snapshots) <= keep:
            return
        dropped = len(snapshots) - keep
        self._snapshots[aggregate_id] = snapshots[-keep:]
        _log.debug("snapshots_trimmed", aggregate_id=aggregate_id, dropped=dropped, kept=keep)

    def clear(self) -> None:
        with self._lock:
            self._snapshots.clear()

    def clear_aggregate(self, aggregate_id: str) -> None:
        if not aggregate_id:
            return
        with self._lock:
            self._snapshots.pop(aggregate_id, None)

    def snapshots_for(self, aggregate_id: str) -> list[Snapshot]:
        """Return every retained snapshot of *aggregate_id*, oldest first."""
        with self._lock:
            return list(self._snapshots.get(aggregate_id, []))

    def snapshot_counts(self) -> dict[str, int]:
        with self._lock:
            return {k: len(v) for k, v in self._snapshots.items()}


__all__ = ["DEFAULT_KEEP_COUNT", "InMemorySnapshotCache", "Snapshot", "SnapshotCache"]
