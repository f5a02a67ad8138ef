"""Testing – clocks, generators and pytest fixtures for ledgerkit users."""
from ledgerkit.testing.generators import FakeClock, StepClock

__all__ = ["FakeClock", "StepClock"]
