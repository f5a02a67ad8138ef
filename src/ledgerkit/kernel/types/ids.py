"""Identifier value objects for aggregates and their owners."""

from __future__ import annotations

import dataclasses
import uuid

from ledgerkit.kernel.errors.domain import ValidationError


@dataclasses.dataclass(frozen=True, slots=True)
class _StrId:
    """Immutable, hashable string identifier.

    Surrounding whitespace is stripped so ``AccountId(" a-1 ")`` and
    ``AccountId("a-1")`` name the same event stream.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError(
                f"{type(self).__name__} must be a string, got {type(self.value).__name__}"
            )
        cleaned = self.value.strip()
        if not cleaned:
            raise ValidationError(f"{type(self).__name__} must not be empty")
        object.__setattr__(self, "value", cleaned)

    def __str__(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True, slots=True)
class EntityId(_StrId):
    """Aggregate identifier; :meth:`generate` mints a random UUID4."""

    @classmethod
    def generate(cls) -> "EntityId":
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_str(cls, value: str) -> "EntityId":
        return cls(value)


@dataclasses.dataclass(frozen=True, slots=True)
class AccountId(EntityId):
    pass


@dataclasses.dataclass(frozen=True, slots=True)
class UserId(_StrId):
    """Owner of one or more accounts."""


__all__ = ["AccountId", "EntityId", "UserId"]
