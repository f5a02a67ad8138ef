"""Accounts – event-sourced account aggregate and its repository."""

from ledgerkit.accounts.account import Account, AccountSnapshot, AccountStatus
from ledgerkit.accounts.events import (
    ACCOUNT_EVENTS,
    AccountClosed,
    AccountOpened,
    MoneyDeposited,
    MoneyWithdrawn,
)
from ledgerkit.accounts.repository import AccountRepository, create_account_repository

__all__ = [
    "ACCOUNT_EVENTS",
    "Account",
    "AccountClosed",
    "AccountOpened",
    "AccountRepository",
    "AccountSnapshot",
    "AccountStatus",
    "MoneyDeposited",
    "MoneyWithdrawn",
    "create_account_repository",
]
