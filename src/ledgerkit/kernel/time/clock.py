"""Kernel time – Clock protocol + implementations.

Event occurrence times, storage times and snapshot times all come from a
:class:`Clock`, so every timestamp the library records is timezone-aware
UTC and tests can substitute a fixed or stepping clock.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


def utc_now() -> datetime:
    return datetime.now(UTC)


class SystemClock:
    """Wall-clock UTC time."""

    def now(self) -> datetime:
        return utc_now()


class FrozenClock:
    """Clock that returns the same instant until moved explicitly."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = _aware(fixed)

    def now(self) -> datetime:
        return self._fixed

    def set(self, instant: datetime) -> None:
        self._fixed = _aware(instant)

    def advance(self, **kwargs: int | float) -> None:
        """Move forward by ``timedelta(**kwargs)``."""
        self._fixed += timedelta(**kwargs)


def _aware(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        raise ValueError(f"clock instants must be timezone-aware, got {instant!r}")
    return instant


__all__ = ["Clock", "FrozenClock", "SystemClock", "utc_now"]
