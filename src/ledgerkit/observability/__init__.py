"""Observability – structured logging."""

from ledgerkit.observability.logging import JsonLoggerFactory, SensitiveFieldsFilter, get_logger

__all__ = [
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
