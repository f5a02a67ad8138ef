"""AccountRepository – event-sourced persistence for :class:`Account`."""

from __future__ import annotations

from ledgerkit.accounts.account import Account, AccountStatus
from ledgerkit.accounts.events import AccountOpened
from ledgerkit.application.event_sourcing import (
    EventLog,
    EventSourcedRepository,
    InMemoryEventLog,
    InMemorySnapshotCache,
    SnapshotCache,
    SnapshotPolicy,
)
from ledgerkit.config.settings import EventSourcingSettings
from ledgerkit.kernel.time import Clock
from ledgerkit.kernel.types import AccountId, Money, UserId
from ledgerkit.kernel.types.money import DEFAULT_CURRENCY


class AccountRepository(EventSourcedRepository[Account]):
    """Loads and saves accounts through the event log and snapshot cache.

    ``find_by_user`` and ``find_all_active`` scan the whole log for
    :class:`AccountOpened` events and rebuild every hit through :meth:`load`.
    That is O(total events); there is no user → account index, so results
    are always consistent with the log.
    """

    def __init__(
        self,
        events: EventLog,
        snapshots: SnapshotCache,
        policy: SnapshotPolicy | None = None,
        *,
        clock: Clock | None = None,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        super().__init__(events, snapshots, policy)
        self._clock = clock
        self._currency = currency

    @property
    def currency(self) -> str:
        """Currency used for accounts opened without an explicit ``Money``."""
        return self._currency

    def _aggregate_class(self) -> type[Account]:
        return Account

    def _create_empty(self, agg_id: str) -> Account:
        return Account(AccountId(agg_id), clock=self._clock, currency=self._currency)

    def open_account(
        self,
        user_id: UserId,
        initial_amount: Money | int | str = 0,
        *,
        account_id: AccountId | None = None,
    ) -> Account:
        """Open and save an account; plain amounts are in :attr:`currency`."""
        if not isinstance(initial_amount, Money):
            initial_amount = Money.of(initial_amount, self._currency)
        account = Account.open(
            user_id, initial_amount, account_id=account_id, clock=self._clock
        )
        self.save(account)
        return account

    def find_by_user(self, user_id: UserId | str) -> list[Account]:
        accounts: list[Account] = []
        for stored in self._events.events_of_kind(AccountOpened):
            if str(stored.payload.user_id) != str(user_id):
                continue
            account = self.load(stored.aggregate_id)
            if account is not None:
                accounts.append(account)
        return accounts

    def find_all_active(self) -> list[Account]:
        accounts: list[Account] = []
        for stored in self._events.events_of_kind(AccountOpened):
            account = self.load(stored.aggregate_id)
            if account is not None and account.status is AccountStatus.ACTIVE:
                accounts.append(account)
        return accounts

    def remove(self, account: Account | None, reason: str = "Account removal requested") -> None:
        """Close *account* if it is still ACTIVE and persist the closure.

        Accounts are never deleted; removal is a state transition.
        """
        if account is None:
            return
        if account.status is AccountStatus.ACTIVE:
            account.close(reason)
            self.save(account)


def create_account_repository(
    settings: EventSourcingSettings | None = None,
    *,
    clock: Clock | None = None,
) -> AccountRepository:
    """Wire an :class:`AccountRepository` over fresh in-memory stores."""
    settings = settings or EventSourcingSettings()
    return AccountRepository(
        InMemoryEventLog(clock=clock),
        InMemorySnapshotCache(keep=settings.snapshot_retention, clock=clock),
        SnapshotPolicy.from_settings(settings),
        clock=clock,
        currency=settings.default_currency,
    )


__all__ = ["AccountRepository", "create_account_repository"]
