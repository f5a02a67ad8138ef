"""Observability – SensitiveFieldsFilter.

Account events and errors are logged with structured context; anything
bound under a sensitive key is masked before rendering.
"""
from __future__ import annotations

from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {"password", "secret", "token", "api_key", "authorization", "account_number"}
)


class SensitiveFieldsFilter:
    """Mask values stored under sensitive keys (case-insensitive)."""

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        fields = sensitive_fields or DEFAULT_SENSITIVE_FIELDS
        self._fields = frozenset(f.lower() for f in fields)

    def is_sensitive(self, key: str) -> bool:
        return key.lower() in self._fields

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask top-level keys only."""
        return {k: self.REDACTED if self.is_sensitive(k) else v for k, v in data.items()}

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask keys at any depth, descending into dicts, lists and tuples."""
        return {
            k: self.REDACTED if self.is_sensitive(k) else self._walk(v)
            for k, v in data.items()
        }

    def _walk(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact_deep(value)
        if isinstance(value, (list, tuple)):
            return type(value)(self._walk(v) for v in value)
        return value

    def processor(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        """structlog processor form of :meth:`redact_deep`."""
        return self.redact_deep(event_dict)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
