"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                      (domain.py)
    │   ├── InvariantViolationError
    │   ├── ValidationError
    │   ├── NotFoundError
    │   ├── ConflictError
    │   │   └── ConcurrencyConflictError  (retryable)
    │   ├── InsufficientBalanceError
    │   └── InvalidStateTransitionError
    ├── ApplicationError                 (application.py)
    └── InfrastructureError              (infrastructure.py)
        └── CorruptHistoryError
"""

from ledgerkit.kernel.errors.application import ApplicationError
from ledgerkit.kernel.errors.base import BaseError
from ledgerkit.kernel.errors.domain import (
    ConcurrencyConflictError,
    ConflictError,
    DomainError,
    InsufficientBalanceError,
    InvalidStateTransitionError,
    InvariantViolationError,
    NotFoundError,
    ValidationError,
)
from ledgerkit.kernel.errors.infrastructure import (
    CorruptHistoryError,
    InfrastructureError,
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
