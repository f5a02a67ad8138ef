"""Domain errors – rejected commands and violated business rules.

Everything here is raised synchronously by an aggregate or a store before
any state changes, so the caller's view of the world is still consistent
when it catches one.
"""

from __future__ import annotations

from typing import Any

from ledgerkit.kernel.errors.base import BaseError


class DomainError(BaseError):
    default_code = "domain_error"


class InvariantViolationError(DomainError):
    """Internal consistency check failed; indicates a bug, not bad input."""

    default_code = "invariant_violation"


class ValidationError(DomainError):
    """An argument was missing, blank, out of range or of the wrong type.

    ``errors`` optionally lists the offending fields as
    ``{"field": ..., "message": ...}`` entries.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = list(errors or ())

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors if e.get("field")]

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "errors": self.errors}


class NotFoundError(DomainError):
    """No aggregate exists under the requested identifier."""

    default_code = "not_found"

    def __init__(self, resource: str, identifier: Any = None, **kwargs: Any) -> None:
        kwargs.setdefault("detail", {"resource": resource, "identifier": identifier})
        label = resource if identifier is None else f"{resource} '{identifier}'"
        super().__init__(f"{label} not found", **kwargs)
        self.resource = resource
        self.identifier = identifier


class ConflictError(DomainError):
    """The command collides with state written by someone else."""

    default_code = "conflict"


class ConcurrencyConflictError(ConflictError):
    """The stored version no longer matches the version the writer expected.

    Retryable: reload the aggregate, re-run the operation, save again.
    """

    default_code = "concurrency_conflict"
    retryable = True

    def __init__(self, aggregate_id: str, expected: int, actual: int, **kwargs: Any) -> None:
        kwargs.setdefault(
            "detail",
            {"aggregate_id": aggregate_id, "expected": expected, "actual": actual},
        )
        super().__init__(
            f"Concurrency conflict on aggregate '{aggregate_id}': "
            f"expected version {expected}, found {actual}",
            **kwargs,
        )
        self.aggregate_id = aggregate_id
        self.expected = expected
        self.actual = actual


class InsufficientBalanceError(DomainError):
    """A withdrawal asked for more than the available balance.

    An expected business rejection, not a programming error.
    """

    default_code = "insufficient_balance"

    def __init__(self, balance: Any, requested: Any, **kwargs: Any) -> None:
        kwargs.setdefault("detail", {"balance": str(balance), "requested": str(requested)})
        super().__init__(
            f"Insufficient balance: available {balance}, requested {requested}",
            **kwargs,
        )
        self.balance = balance
        self.requested = requested


class InvalidStateTransitionError(DomainError):
    """An operation was attempted while the aggregate was in the wrong state."""

    default_code = "invalid_state_transition"

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", {"current_state": current_state, "operation": operation})
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.operation = operation


__all__ = [
    "ConcurrencyConflictError",
    "ConflictError",
    "DomainError",
    "InsufficientBalanceError",
    "InvalidStateTransitionError",
    "InvariantViolationError",
    "NotFoundError",
    "ValidationError",
]
