"""Kernel value types."""
from ledgerkit.kernel.types.ids import AccountId, EntityId, UserId
from ledgerkit.kernel.types.money import Money

__all__ = ["AccountId", "EntityId", "Money", "UserId"]
