"""Invariant helpers for asserting domain rules."""

from __future__ import annotations

from datetime import datetime
from typing import TypeVar

from ledgerkit.kernel.errors.domain import InvariantViolationError, ValidationError

T = TypeVar("T")


class Invariant:
    """Namespace for invariant and argument assertions."""

    @staticmethod
    def require(condition: bool, message: str) -> None:
        """Raise ``InvariantViolationError`` when *condition* is False."""
        if not condition:
            raise InvariantViolationError(message)

    @staticmethod
    def argument(condition: bool, message: str, *, field: str | None = None) -> None:
        """Raise ``ValidationError`` when a caller-supplied argument is invalid."""
        if not condition:
            errors = [{"field": field, "message": message}] if field else None
            raise ValidationError(message, errors=errors)

    @staticmethod
    def not_none(value: T | None, name: str = "value") -> T:
        """Assert *value* is not None, returning it typed."""
        if value is None:
            raise ValidationError(f"{name} must not be None", errors=[{"field": name}])
        return value

    @staticmethod
    def not_blank(value: str | None, name: str = "value") -> str:
        """Assert *value* is a non-empty, non-whitespace string."""
        if value is None or not str(value).strip():
            raise ValidationError(f"{name} must not be empty", errors=[{"field": name}])
        return value

    @staticmethod
    def aware(value: datetime | None, name: str = "value") -> datetime:
        """Assert *value* is a timezone-aware ``datetime``."""
        Invariant.not_none(value, name)
        if not isinstance(value, datetime) or value.tzinfo is None:
            raise ValidationError(
                f"{name} must be a timezone-aware datetime, got {value!r}",
                errors=[{"field": name}],
            )
        return value


def ensure(condition: bool, message: str) -> None:
    """Shorthand for ``Invariant.require``."""
    Invariant.require(condition, message)


__all__ = ["Invariant", "ensure"]
