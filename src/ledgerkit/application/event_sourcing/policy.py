"""Application event sourcing – when to cut a new snapshot."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from ledgerkit.application.event_sourcing.snapshot import Snapshot
from ledgerkit.kernel.ddd.invariant import Invariant

if TYPE_CHECKING:
    from ledgerkit.config.settings import EventSourcingSettings

DEFAULT_SNAPSHOT_THRESHOLD = 50


@dataclasses.dataclass(frozen=True)
class SnapshotPolicy:
    """Snapshot when none exists yet, or every *threshold* committed events."""

    threshold: int = DEFAULT_SNAPSHOT_THRESHOLD

    def __post_init__(self) -> None:
        Invariant.argument(self.threshold >= 1, "threshold must be >= 1", field="threshold")

    @classmethod
    def from_settings(cls, settings: "EventSourcingSettings") -> "SnapshotPolicy":
        return cls(threshold=settings.snapshot_threshold)

    def should_snapshot(self, version: int, last: Snapshot | None) -> bool:
        if version <= 0:
            return False
        if last is None:
            return True
        return version - last.version >= self.threshold


__all__ = ["DEFAULT_SNAPSHOT_THRESHOLD", "SnapshotPolicy"]
