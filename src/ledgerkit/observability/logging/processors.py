"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog

from ledgerkit.kernel.errors import BaseError


def error_details(
    logger: Any,           # noqa: ARG001
    method_name: str,      # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor that expands a ``BaseError`` bound as ``error``.

    ``log.warning("concurrency_conflict", error=exc)`` renders as the error's
    ``to_dict()`` instead of its repr.
    """
    err = event_dict.get("error")
    if isinstance(err, BaseError):
        event_dict["error"] = err.to_dict()
    return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["error_details", "get_logger"]
