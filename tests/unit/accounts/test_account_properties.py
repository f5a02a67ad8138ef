"""Property-based tests for Account replay and snapshot equivalence."""

from __future__ import annotations

from hypothesis import given, settings

from ledgerkit.accounts import Account, AccountRepository
from ledgerkit.application.event_sourcing import (
    InMemoryEventLog,
    InMemorySnapshotCache,
    SnapshotPolicy,
)
from ledgerkit.kernel.types import AccountId, Money, UserId
from ledgerkit.testing.generators.strategies import (
    AccountOperation,
    account_operations_strategy,
    money_strategy,
)


def _run(account: Account, operations: list[AccountOperation]) -> None:
    for kind, amount in operations:
        if kind == "deposit":
            account.deposit(amount)
        elif account.can_withdraw(amount):
            account.withdraw(amount)


def _repository(threshold: int) -> AccountRepository:
    return AccountRepository(
        InMemoryEventLog(), InMemorySnapshotCache(), SnapshotPolicy(threshold=threshold)
    )


class TestAccountProperties:
    @given(money_strategy(), account_operations_strategy())
    @settings(max_examples=50, deadline=None)
    def test_balance_never_negative(
        self, opening: Money, operations: list[AccountOperation]
    ) -> None:
        account = Account.open(UserId("u"), opening)
        _run(account, operations)
        assert not account.balance.is_negative()

    @given(money_strategy(), account_operations_strategy())
    @settings(max_examples=50, deadline=None)
    def test_replay_reproduces_live_state(
        self, opening: Money, operations: list[AccountOperation]
    ) -> None:
        live = Account.open(UserId("u"), opening, account_id=AccountId("acc-1"))
        _run(live, operations)
        history = live.uncommitted_events

        replayed = Account(AccountId("acc-1"))
        replayed.load_from_history(history)
        assert replayed.balance == live.balance
        assert replayed.status is live.status
        assert replayed.version == len(history)

    @given(money_strategy(), account_operations_strategy(max_size=40))
    @settings(max_examples=30, deadline=None)
    def test_snapshot_load_equals_full_replay(
        self, opening: Money, operations: list[AccountOperation]
    ) -> None:
        repo = _repository(threshold=3)
        account = Account.open(UserId("u"), opening, account_id=AccountId("acc-1"))
        repo.save(account)
        for operation in operations:
            _run(account, [operation])
            repo.save(account)

        loaded = repo.get_or_raise("acc-1")
        replayed = Account(AccountId("acc-1"))
        replayed.load_from_history(repo.history_of("acc-1"))
        assert loaded.balance == replayed.balance
        assert loaded.version == replayed.version == repo.event_count("acc-1")

    @given(money_strategy(), account_operations_strategy())
    @settings(max_examples=30, deadline=None)
    def test_balance_is_opening_plus_net_movements(
        self, opening: Money, operations: list[AccountOperation]
    ) -> None:
        account = Account.open(UserId("u"), opening)
        _run(account, operations)
        expected = opening
        for event in account.uncommitted_events[1:]:
            if type(event).__name__ == "MoneyDeposited":
                expected = expected + event.amount
            else:
                expected = expected - event.amount
        assert account.balance == expected
