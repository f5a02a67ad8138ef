"""Kernel – framework-agnostic building blocks."""

from ledgerkit.kernel.errors import (
    ApplicationError,
    BaseError,
    ConcurrencyConflictError,
    ConflictError,
    CorruptHistoryError,
    DomainError,
    InfrastructureError,
    InsufficientBalanceError,
    InvalidStateTransitionError,
    InvariantViolationError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConcurrencyConflictError",
    "ConflictError",
    "CorruptHistoryError",
    "DomainError",
    "InfrastructureError",
    "InsufficientBalanceError",
    "InvalidStateTransitionError",
    "InvariantViolationError",
    "NotFoundError",
    "ValidationError",
]
