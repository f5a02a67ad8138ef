"""Testing generators – deterministic clocks and hypothesis strategies."""
from ledgerkit.testing.generators.clocks import FakeClock, StepClock

__all__ = ["FakeClock", "StepClock"]
