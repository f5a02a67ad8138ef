"""Account – event-sourced financial account aggregate."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from ledgerkit.accounts.events import (
    AccountClosed,
    AccountOpened,
    MoneyDeposited,
    MoneyWithdrawn,
)
from ledgerkit.application.event_sourcing import EventSourcedAggregate, Mutator
from ledgerkit.kernel.ddd import DomainEvent, Invariant
from ledgerkit.kernel.errors import (
    InsufficientBalanceError,
    InvalidStateTransitionError,
    ValidationError,
)
from ledgerkit.kernel.time import Clock, SystemClock
from ledgerkit.kernel.types import AccountId, Money, UserId
from ledgerkit.kernel.types.money import DEFAULT_CURRENCY


class AccountStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"
    # Part of the vocabulary; no operation transitions into it yet.
    SUSPENDED = "SUSPENDED"


@dataclasses.dataclass(frozen=True)
class AccountSnapshot:
    """Materialised :class:`Account` state."""

    account_id: str
    user_id: UserId
    balance: Money
    status: AccountStatus
    created_at: datetime
    version: int


class Account(EventSourcedAggregate):
    """A user's account: open, deposit, withdraw, close.

    Balance changes only through deposit and withdrawal events and never
    goes negative; closing requires a zero balance and is terminal.

    Use :meth:`open` to create a new account.  The bare constructor yields an
    empty shell for replay; *currency* only names the zero balance such a
    shell reports before its opening event is applied.
    """

    def __init__(
        self,
        id: AccountId,  # noqa: A002
        *,
        clock: Clock | None = None,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        super().__init__(id)
        self._clock = clock or SystemClock()
        self._currency = currency
        self._user_id: UserId | None = None
        self._balance: Money | None = None
        self._status: AccountStatus | None = None
        self._created_at: datetime | None = None

    @classmethod
    def open(
        cls,
        user_id: UserId,
        initial_balance: Money,
        *,
        account_id: AccountId | None = None,
        clock: Clock | None = None,
    ) -> "Account":
        """Open a new ACTIVE account holding *initial_balance*."""
        Invariant.not_none(user_id, "user_id")
        Invariant.not_none(initial_balance, "initial_balance")
        Invariant.argument(
            isinstance(initial_balance, Money) and not initial_balance.is_negative(),
            "initial_balance must be a non-negative Money",
            field="initial_balance",
        )
        account = cls(
            account_id or AccountId.generate(),
            clock=clock,
            currency=initial_balance.currency,
        )
        account._apply_change(
            AccountOpened(
                account_id=str(account.id),
                user_id=user_id,
                initial_balance=initial_balance,
                occurred_at=account._clock.now(),
            )
        )
        return account

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def deposit(self, amount: Money, description: str | None = None) -> None:
        self._require_active("deposit")
        self._check_amount(amount, "deposit")
        self._apply_change(
            MoneyDeposited(
                account_id=str(self.id),
                user_id=self._user_id,
                amount=amount,
                description=description or "Deposit",
                occurred_at=self._clock.now(),
            )
        )

    def withdraw(self, amount: Money, description: str | None = None) -> None:
        self._require_active("withdraw")
        self._check_amount(amount, "withdraw")
        if self._balance < amount:
            raise InsufficientBalanceError(self._balance, amount)
        self._apply_change(
            MoneyWithdrawn(
                account_id=str(self.id),
                user_id=self._user_id,
                amount=amount,
                description=description or "Withdrawal",
                occurred_at=self._clock.now(),
            )
        )

    def close(self, reason: str | None = None) -> None:
        self._require_active("close")
        if not self._balance.is_zero():
            raise InvalidStateTransitionError(
                f"Cannot close account with non-zero balance {self._balance}",
                current_state=self._status.value,
                operation="close",
            )
        self._apply_change(
            AccountClosed(
                account_id=str(self.id),
                user_id=self._user_id,
                reason=reason or "Closed by owner",
                occurred_at=self._clock.now(),
            )
        )

    def _require_active(self, operation: str) -> None:
        if self._status is not AccountStatus.ACTIVE:
            state = self._status.value if self._status is not None else "UNOPENED"
            raise InvalidStateTransitionError(
                f"Cannot {operation}: account is not active (status: {state})",
                current_state=state,
                operation=operation,
            )

    def _check_amount(self, amount: Money, operation: str) -> None:
        Invariant.not_none(amount, "amount")
        if not isinstance(amount, Money):
            raise ValidationError(f"{operation} amount must be Money, got {type(amount).__name__}")
        if not amount.same_currency(self._balance):
            raise ValidationError(
                f"Currency mismatch: account holds {self._balance.currency}, got {amount.currency}"
            )
        Invariant.argument(amount.is_positive(), f"{operation} amount must be > 0", field="amount")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def user_id(self) -> UserId | None:
        return self._user_id

    @property
    def balance(self) -> Money | None:
        return self._balance

    @property
    def status(self) -> AccountStatus | None:
        return self._status

    @property
    def created_at(self) -> datetime | None:
        return self._created_at

    @property
    def is_active(self) -> bool:
        return self._status is AccountStatus.ACTIVE

    def can_withdraw(self, amount: Money) -> bool:
        if not self.is_active or not isinstance(amount, Money):
            return False
        return amount.same_currency(self._balance) and self._balance >= amount

    @property
    def available_balance(self) -> Money:
        """Balance while ACTIVE, zero otherwise."""
        if self.is_active:
            return self._balance
        currency = self._balance.currency if self._balance is not None else self._currency
        return Money.zero(currency)

    @property
    def is_overdrawn(self) -> bool:
        return self._balance is not None and self._balance.is_negative()

    # ------------------------------------------------------------------
    # Event application
    # ------------------------------------------------------------------

    def _mutators(self) -> Mapping[type[DomainEvent], Mutator]:
        return {
            AccountOpened: self._on_opened,
            MoneyDeposited: self._on_deposited,
            MoneyWithdrawn: self._on_withdrawn,
            AccountClosed: self._on_closed,
        }

    def _on_opened(self, event: AccountOpened) -> None:
        self._user_id = event.user_id
        self._balance = event.initial_balance
        self._status = AccountStatus.ACTIVE
        self._created_at = event.occurred_at

    def _on_deposited(self, event: MoneyDeposited) -> None:
        self._balance = self._balance + event.amount

    def _on_withdrawn(self, event: MoneyWithdrawn) -> None:
        self._balance = self._balance - event.amount

    def _on_closed(self, event: AccountClosed) -> None:  # noqa: ARG002
        self._status = AccountStatus.CLOSED

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            account_id=str(self.id),
            user_id=self._user_id,
            balance=self._balance,
            status=self._status,
            created_at=self._created_at,
            version=self.version,
        )

    def _restore(self, data: Any) -> None:
        if not isinstance(data, AccountSnapshot):
            raise ValidationError(f"Not an account snapshot: {type(data).__name__}")
        if data.account_id != str(self.id):
            raise ValidationError(
                f"Snapshot belongs to account '{data.account_id}', not '{self.id}'"
            )
        self._user_id = data.user_id
        self._balance = data.balance
        self._status = data.status
        self._created_at = data.created_at


__all__ = ["Account", "AccountSnapshot", "AccountStatus"]
