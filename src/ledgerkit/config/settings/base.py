"""Config settings – Settings base class and variable naming."""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass
class Settings:
    """Base class for settings read from the environment.

    Subclasses are dataclasses whose fields map to upper-case variables.
    With ``_prefix = "LEDGERKIT"`` the field ``snapshot_threshold`` is read
    from ``LEDGERKIT_SNAPSHOT_THRESHOLD``; without a prefix, from
    ``SNAPSHOT_THRESHOLD``.  Validation runs on every construction, so
    loaders and :func:`dataclasses.replace` both yield checked objects.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        key = f"{cls._prefix}_{field_name}" if cls._prefix else field_name
        return key.upper()

    @classmethod
    def env_keys(cls) -> dict[str, str]:
        """Field name → environment variable, in declaration order."""
        return {f.name: cls.env_key(f.name) for f in dataclasses.fields(cls)}


__all__ = ["Settings"]
