"""Infrastructure errors – storage and replay failures."""

from __future__ import annotations

from typing import Any

from ledgerkit.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Storage / replay failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class CorruptHistoryError(InfrastructureError):
    """Replay met an event kind the aggregate does not recognise.

    Signals a mismatch between deployed code and the stored event vocabulary.
    Reconstruction must abort; the event is never skipped.
    """

    default_code = "corrupt_history"

    def __init__(
        self,
        aggregate_type: str,
        event_type: str,
        *,
        aggregate_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{aggregate_type} cannot apply unknown event '{event_type}'"
        if aggregate_id is not None:
            msg = f"{aggregate_type} '{aggregate_id}' cannot apply unknown event '{event_type}'"
        kwargs.setdefault(
            "detail",
            {"aggregate_type": aggregate_type, "aggregate_id": aggregate_id, "event_type": event_type},
        )
        super().__init__(msg, **kwargs)
        self.aggregate_type = aggregate_type
        self.aggregate_id = aggregate_id
        self.event_type = event_type


__all__ = ["CorruptHistoryError", "InfrastructureError"]
