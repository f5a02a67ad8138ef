"""Config settings – tunables for the event log, snapshots and logging."""
from __future__ import annotations

import dataclasses
import logging
import re
from typing import ClassVar

from ledgerkit.config.settings.base import Settings
from ledgerkit.config.validation.errors import InvalidSettingValueError

_ISO4217 = re.compile(r"^[A-Z]{3}$")


@dataclasses.dataclass
class EventSourcingSettings(Settings):
    """Settings read from ``LEDGERKIT_*`` environment variables.

    * ``snapshot_threshold`` – committed events since the last snapshot that
      trigger a new one.
    * ``snapshot_retention`` – snapshots kept per aggregate.
    """

    _prefix: ClassVar[str] = "LEDGERKIT"

    snapshot_threshold: int = 50
    snapshot_retention: int = 3
    default_currency: str = "KRW"
    log_level: str = "INFO"
    json_logs: bool = True

    def _validate(self) -> None:
        if self.snapshot_threshold < 1:
            raise InvalidSettingValueError(
                "snapshot_threshold", self.snapshot_threshold, "must be >= 1"
            )
        if self.snapshot_retention < 1:
            raise InvalidSettingValueError(
                "snapshot_retention", self.snapshot_retention, "must be >= 1"
            )
        if not _ISO4217.match(self.default_currency):
            raise InvalidSettingValueError(
                "default_currency", self.default_currency, "must be an ISO 4217 code"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["EventSourcingSettings"]
