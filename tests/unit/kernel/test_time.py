"""Unit tests for kernel time utilities."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from ledgerkit.kernel.time import FrozenClock, SystemClock, utc_now
from ledgerkit.testing import FakeClock, StepClock


class TestSystemClock:
    def test_now_is_utc_aware(self) -> None:
        result = SystemClock().now()
        assert result.tzinfo is not None
        assert result.utcoffset() == timedelta(0)

    def test_utc_now(self) -> None:
        assert utc_now().tzinfo is not None


class TestFrozenClock:
    def test_returns_fixed(self) -> None:
        fixed = datetime(2025, 6, 1, tzinfo=UTC)
        clock = FrozenClock(fixed)
        assert clock.now() == fixed
        assert clock.now() == fixed

    def test_advance(self) -> None:
        clock = FrozenClock(datetime(2025, 6, 1, tzinfo=UTC))
        clock.advance(hours=2)
        assert clock.now() == datetime(2025, 6, 1, 2, tzinfo=UTC)

    def test_fake_clock(self) -> None:
        assert FakeClock().now() == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def test_fake_clock_at(self) -> None:
        at = datetime(2024, 2, 29, 8, 30, tzinfo=UTC)
        assert FakeClock(at).now() == at
        with pytest.raises(ValueError):
            FakeClock(datetime(2024, 2, 29))


class TestStepClock:
    def test_advances_each_call(self) -> None:
        clock = StepClock(seconds=5)
        t0, t1 = clock.now(), clock.now()
        assert t1 - t0 == timedelta(seconds=5)
        assert clock.call_count == 2

    def test_peek_does_not_advance(self) -> None:
        clock = StepClock()
        first = clock.peek()
        assert clock.now() == first
        assert clock.call_count == 1

    def test_reset(self) -> None:
        clock = StepClock()
        start = clock.now()
        clock.now()
        clock.reset()
        assert clock.now() == start
        assert clock.call_count == 1

    def test_skip_moves_without_counting(self) -> None:
        clock = StepClock()
        clock.skip(3)
        assert clock.now() == StepClock.EPOCH + 3 * clock.step
        assert clock.call_count == 1

    def test_rejects_non_positive_step(self) -> None:
        with pytest.raises(ValueError):
            StepClock(step=timedelta(0))


class TestFrozenClockGuards:
    def test_rejects_naive_datetime(self) -> None:
        with pytest.raises(ValueError):
            FrozenClock(datetime(2025, 6, 1))

    def test_set(self) -> None:
        clock = FakeClock()
        target = datetime(2030, 1, 1, tzinfo=UTC)
        clock.set(target)
        assert clock.now() == target
