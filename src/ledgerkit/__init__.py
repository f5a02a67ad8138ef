"""
ledgerkit – Event-sourced account ledger core.

Import path convention::

    from ledgerkit.kernel.errors import ConcurrencyConflictError
    from ledgerkit.application.event_sourcing import InMemoryEventLog, InMemorySnapshotCache
    from ledgerkit.accounts import Account, AccountRepository
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
