"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from ledgerkit.config.settings.base import Settings
from ledgerkit.config.settings.loaders import SettingsLoader
from ledgerkit.config.validation.errors import (
    ConfigError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)


def _has_default(field: dataclasses.Field) -> bool:  # type: ignore[type-arg]
    return (
        field.default is not dataclasses.MISSING
        or field.default_factory is not dataclasses.MISSING  # type: ignore[misc]
    )


class SettingsFactory:
    """Build one settings object from several sources.

    Precedence, lowest first: field defaults, each loader in the order given,
    then *overrides*.  A loader that fails with :class:`ConfigError` (an
    unparseable variable, say) contributes nothing and the next source is
    consulted; validation of the merged result still runs and raises.

    Example::

        settings = SettingsFactory.create(
            EventSourcingSettings,
            loaders=[DotenvSettingsLoader(), EnvSettingsLoader()],
            overrides={"snapshot_threshold": 10},
        )
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        values: dict[str, Any] = {}
        for loader in loaders or ():
            try:
                loaded = loader.load(settings_cls)
            except ConfigError:
                continue
            values.update(dataclasses.asdict(loaded))
        values.update(overrides or {})

        missing = [
            f.name
            for f in dataclasses.fields(settings_cls)  # type: ignore[arg-type]
            if f.name not in values and not _has_default(f)
        ]
        if missing:
            raise MissingRequiredSettingError(missing[0])

        try:
            return settings_cls(**values)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Cannot build {settings_cls.__name__}: {exc}") from exc


__all__ = ["SettingsFactory"]
