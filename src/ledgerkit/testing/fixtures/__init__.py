"""Testing fixtures – pytest fixtures for ledgerkit stores.

Enable with ``pytest_plugins = ["ledgerkit.testing.fixtures"]`` in a conftest.
"""
from ledgerkit.testing.fixtures.clock import fake_clock, step_clock
from ledgerkit.testing.fixtures.stores import account_repository, event_log, snapshot_cache

__all__ = [
    "account_repository",
    "event_log",
    "fake_clock",
    "snapshot_cache",
    "step_clock",
]
