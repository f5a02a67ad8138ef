"""Observability – structured logging helpers."""
from ledgerkit.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from ledgerkit.observability.logging.factory import JsonLoggerFactory, configure_from_settings
from ledgerkit.observability.logging.processors import error_details, get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "configure_from_settings",
    "error_details",
    "get_logger",
]
