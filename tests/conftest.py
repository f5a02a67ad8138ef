"""Shared pytest configuration.

Registers the ``ledgerkit.testing.fixtures`` plugin (``fake_clock``,
``step_clock``, ``event_log``, ``snapshot_cache``, ``account_repository``).
"""

pytest_plugins = ["ledgerkit.testing.fixtures"]
