"""Account event vocabulary."""

from __future__ import annotations

import dataclasses

from ledgerkit.kernel.ddd.domain_event import DomainEvent
from ledgerkit.kernel.types import Money, UserId


@dataclasses.dataclass(frozen=True)
class AccountOpened(DomainEvent):
    account_id: str
    user_id: UserId
    initial_balance: Money


@dataclasses.dataclass(frozen=True)
class MoneyDeposited(DomainEvent):
    account_id: str
    user_id: UserId
    amount: Money
    description: str


@dataclasses.dataclass(frozen=True)
class MoneyWithdrawn(DomainEvent):
    account_id: str
    user_id: UserId
    amount: Money
    description: str


@dataclasses.dataclass(frozen=True)
class AccountClosed(DomainEvent):
    account_id: str
    user_id: UserId
    reason: str


ACCOUNT_EVENTS: tuple[type[DomainEvent], ...] = (
    AccountOpened,
    MoneyDeposited,
    MoneyWithdrawn,
    AccountClosed,
)

__all__ = [
    "ACCOUNT_EVENTS",
    "AccountClosed",
    "AccountOpened",
    "MoneyDeposited",
    "MoneyWithdrawn",
]
