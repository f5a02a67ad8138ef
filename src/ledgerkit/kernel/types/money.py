"""Money value object with ISO-4217 currency validation."""

from __future__ import annotations

import dataclasses
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final

from ledgerkit.kernel.errors.domain import ValidationError

_ISO4217: Final = re.compile(r"^[A-Z]{3}$")
_CENTS: Final = Decimal("0.01")

DEFAULT_CURRENCY: Final = "KRW"


@dataclasses.dataclass(frozen=True, slots=True)
class Money:
    """Immutable, non-negative monetary amount with explicit currency.

    Amounts are quantised to two decimal places (half-up) on construction, so
    ``Money.of(100)`` and ``Money.of("100.00")`` compare equal.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY  # ISO 4217

    def __post_init__(self) -> None:
        if not isinstance(self.currency, str) or not _ISO4217.match(self.currency):
            raise ValidationError(f"Invalid ISO 4217 currency code: {self.currency!r}")
        if not isinstance(self.amount, Decimal):
            raise ValidationError(f"Money amount must be a Decimal, got {type(self.amount).__name__}")
        if not self.amount.is_finite():
            raise ValidationError("Money amount must be finite")
        if self.amount < 0:
            raise ValidationError("Money amount must be non-negative")
        object.__setattr__(self, "amount", self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP))

    @classmethod
    def of(cls, amount: "str | int | float | Decimal", currency: str = DEFAULT_CURRENCY) -> "Money":
        try:
            value = Decimal(str(amount))
        except InvalidOperation as exc:
            raise ValidationError(f"Cannot convert {amount!r} to Money", cause=exc) from exc
        return cls(value, currency.upper())

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(Decimal(0), currency)

    def __add__(self, other: "Money") -> "Money":
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < 0:
            raise ValidationError("Subtraction would produce negative Money")
        return Money(result, self.currency)

    def __lt__(self, other: "Money") -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def same_currency(self, other: "Money") -> bool:
        return self.currency == other.currency

    def _assert_same_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise ValidationError(f"Expected Money, got {type(other).__name__}")
        if self.currency != other.currency:
            raise ValidationError(
                f"Currency mismatch: {self.currency} vs {other.currency}"
            )

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


__all__ = ["DEFAULT_CURRENCY", "Money"]
