"""DDD building blocks – public re-export surface."""

from ledgerkit.kernel.ddd.domain_event import DomainEvent
from ledgerkit.kernel.ddd.entity import Entity
from ledgerkit.kernel.ddd.invariant import Invariant, ensure

__all__ = [
    "DomainEvent",
    "Entity",
    "Invariant",
    "ensure",
]
