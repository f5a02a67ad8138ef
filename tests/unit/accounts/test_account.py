"""Unit tests for the Account aggregate."""

from __future__ import annotations

from decimal import Decimal

import pytest

from ledgerkit.accounts import (
    Account,
    AccountClosed,
    AccountOpened,
    AccountSnapshot,
    AccountStatus,
    MoneyDeposited,
    MoneyWithdrawn,
)
from ledgerkit.kernel.errors import (
    InsufficientBalanceError,
    InvalidStateTransitionError,
    ValidationError,
)
from ledgerkit.kernel.types import AccountId, Money, UserId
from ledgerkit.testing import StepClock

USER = UserId("user-1")


def krw(amount: str | int) -> Money:
    return Money.of(amount, "KRW")


def _opened(balance: str | int = 0, clock: StepClock | None = None) -> Account:
    return Account.open(USER, krw(balance), account_id=AccountId("acc-1"), clock=clock)


# ---------------------------------------------------------------------------
# Opening
# ---------------------------------------------------------------------------


class TestOpen:
    def test_open_emits_event(self, step_clock: StepClock) -> None:
        account = _opened(1000, step_clock)
        assert account.status is AccountStatus.ACTIVE
        assert account.balance == krw(1000)
        assert account.user_id == USER
        assert account.version == 0
        (event,) = account.uncommitted_events
        assert isinstance(event, AccountOpened)
        assert event.account_id == "acc-1"
        assert account.created_at == event.occurred_at

    def test_open_generates_id(self) -> None:
        account = Account.open(USER, krw(0))
        assert str(account.id)

    def test_open_rejects_negative_balance(self) -> None:
        with pytest.raises(ValidationError):
            Account.open(USER, Money(Decimal("-1"), "KRW"))

    def test_unopened_shell_rejects_commands(self) -> None:
        shell = Account(AccountId("acc-1"))
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            shell.deposit(krw(1))
        assert exc_info.value.current_state == "UNOPENED"


# ---------------------------------------------------------------------------
# Deposits and withdrawals
# ---------------------------------------------------------------------------


class TestMoneyMovement:
    def test_deposit_then_withdraw(self) -> None:
        # open(1000), deposit(500), withdraw(300) leaves 1200
        account = _opened(1000)
        account.deposit(krw(500))
        account.withdraw(krw(300))
        assert account.balance == krw(1200)
        kinds = [type(e) for e in account.uncommitted_events]
        assert kinds == [AccountOpened, MoneyDeposited, MoneyWithdrawn]

    def test_default_descriptions(self) -> None:
        account = _opened(100)
        account.deposit(krw(1))
        account.withdraw(krw(1))
        deposit, withdrawal = account.uncommitted_events[1:]
        assert deposit.description == "Deposit"
        assert withdrawal.description == "Withdrawal"

    def test_insufficient_balance_leaves_state_untouched(self) -> None:
        account = _opened(100)
        with pytest.raises(InsufficientBalanceError) as exc_info:
            account.withdraw(krw(150))
        assert exc_info.value.code == "insufficient_balance"
        assert account.balance == krw(100)
        assert len(account.uncommitted_events) == 1

    def test_withdraw_entire_balance(self) -> None:
        account = _opened(100)
        account.withdraw(krw(100))
        assert account.balance.is_zero()

    @pytest.mark.parametrize("amount", [krw(0), Money.of(5, "USD")])
    def test_invalid_amounts(self, amount: Money) -> None:
        account = _opened(100)
        with pytest.raises(ValidationError):
            account.deposit(amount)
        with pytest.raises(ValidationError):
            account.withdraw(amount)

    def test_non_money_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _opened(100).deposit(5)  # type: ignore[arg-type]

    def test_can_withdraw(self) -> None:
        account = _opened(100)
        assert account.can_withdraw(krw(100))
        assert not account.can_withdraw(krw(101))
        assert not account.can_withdraw(Money.of(1, "USD"))


# ---------------------------------------------------------------------------
# Closing
# ---------------------------------------------------------------------------


class TestClose:
    def test_close_with_balance_rejected(self) -> None:
        account = _opened(100)
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            account.close()
        assert exc_info.value.current_state == "ACTIVE"
        assert account.status is AccountStatus.ACTIVE

    def test_close_after_emptying(self) -> None:
        # withdraw(100) then close() succeeds
        account = _opened(100)
        account.withdraw(krw(100))
        account.close()
        assert account.status is AccountStatus.CLOSED
        closed = account.uncommitted_events[-1]
        assert isinstance(closed, AccountClosed)
        assert closed.reason == "Closed by owner"

    def test_closed_is_terminal(self) -> None:
        account = _opened(0)
        account.close("done")
        for op in (lambda: account.deposit(krw(1)), lambda: account.withdraw(krw(1)), account.close):
            with pytest.raises(InvalidStateTransitionError):
                op()

    def test_available_balance(self) -> None:
        account = _opened(0)
        account.deposit(krw(50))
        assert account.available_balance == krw(50)
        account.withdraw(krw(50))
        account.close()
        assert account.available_balance == krw(0)
        assert not account.is_active
        assert not account.is_overdrawn

    def test_unopened_shell_reports_zero_in_its_currency(self) -> None:
        assert Account(AccountId("x")).available_balance == Money.zero("KRW")
        assert Account(AccountId("x"), currency="USD").available_balance == Money.zero("USD")

    def test_closed_account_keeps_opening_currency(self) -> None:
        account = Account.open(UserId("u"), Money.of(0, "EUR"))
        account.close()
        assert account.available_balance == Money.zero("EUR")


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


class TestAccountSnapshot:
    def test_to_snapshot(self) -> None:
        account = _opened(10)
        account.mark_committed()
        snap = account.to_snapshot()
        assert isinstance(snap, AccountSnapshot)
        assert snap.balance == krw(10)
        assert snap.status is AccountStatus.ACTIVE
        assert snap.version == 1

    def test_restore_rejects_foreign_snapshot(self) -> None:
        other = Account.open(USER, krw(1), account_id=AccountId("acc-2"))
        with pytest.raises(ValidationError):
            Account(AccountId("acc-1"))._restore(other.to_snapshot())

    def test_restore_rejects_wrong_type(self) -> None:
        with pytest.raises(ValidationError):
            Account(AccountId("acc-1"))._restore({"balance": 1})
