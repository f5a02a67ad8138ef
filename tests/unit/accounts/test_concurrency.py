"""Thread-safety tests for the event log, snapshot cache and repository."""

from __future__ import annotations

import dataclasses
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from ledgerkit.accounts import Account, AccountRepository
from ledgerkit.application.event_sourcing import InMemoryEventLog, InMemorySnapshotCache
from ledgerkit.kernel.ddd import DomainEvent
from ledgerkit.kernel.errors import ConcurrencyConflictError
from ledgerkit.kernel.types import AccountId, Money, UserId

WORKERS = 8


@dataclasses.dataclass(frozen=True)
class Tick(DomainEvent):
    worker: int


def krw(amount: int) -> Money:
    return Money.of(amount, "KRW")


class TestEventLogConcurrency:
    def test_racing_appends_one_winner(self) -> None:
        log = InMemoryEventLog()
        barrier = threading.Barrier(WORKERS)

        def attempt(worker: int) -> bool:
            barrier.wait()
            try:
                log.append("agg-1", [Tick(worker=worker), Tick(worker=worker)], 0)
            except ConcurrencyConflictError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            results = list(pool.map(attempt, range(WORKERS)))

        assert results.count(True) == 1
        stream = log.events_for("agg-1")
        assert [e.version for e in stream] == [1, 2]
        # both events of the winning batch, never interleaved
        assert stream[0].payload.worker == stream[1].payload.worker

    def test_global_sequence_unique_and_gapless(self) -> None:
        log = InMemoryEventLog()
        per_worker = 50

        def write(worker: int) -> None:
            agg_id = f"agg-{worker}"
            for version in range(per_worker):
                log.append(agg_id, [Tick(worker=worker)], version)

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            list(pool.map(write, range(WORKERS)))

        sequences = [e.global_sequence for e in log.all_events()]
        assert sequences == list(range(1, WORKERS * per_worker + 1))
        for worker in range(WORKERS):
            versions = [e.version for e in log.events_for(f"agg-{worker}")]
            assert versions == list(range(1, per_worker + 1))


class TestSnapshotCacheConcurrency:
    def test_concurrent_saves_respect_retention(self) -> None:
        cache = InMemorySnapshotCache(keep=3)

        def save(version: int) -> None:
            cache.save("agg-1", version, version)

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            list(pool.map(save, range(1, 101)))

        assert [s.version for s in cache.snapshots_for("agg-1")] == [98, 99, 100]


class TestRepositoryConcurrency:
    @pytest.mark.parametrize("attempts", [WORKERS])
    def test_retry_loop_applies_every_deposit(self, attempts: int) -> None:
        repo = AccountRepository(InMemoryEventLog(), InMemorySnapshotCache())
        repo.save(Account.open(UserId("u"), krw(0), account_id=AccountId("acc-1")))

        def deposit(_: int) -> int:
            conflicts = 0
            while True:
                account = repo.get_or_raise("acc-1")
                account.deposit(krw(10))
                try:
                    repo.save(account)
                except ConcurrencyConflictError:
                    conflicts += 1
                    continue
                return conflicts

        with ThreadPoolExecutor(max_workers=attempts) as pool:
            list(pool.map(deposit, range(attempts)))

        final = repo.get_or_raise("acc-1")
        assert final.balance == krw(10 * attempts)
        assert final.version == attempts + 1
