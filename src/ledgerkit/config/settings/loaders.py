"""Config settings – EnvSettingsLoader, DotenvSettingsLoader.

Fields map to upper-case variables named ``<PREFIX>_<FIELD>``, e.g.
``EventSourcingSettings.snapshot_threshold`` reads
``LEDGERKIT_SNAPSHOT_THRESHOLD``.
"""
from __future__ import annotations

import abc
import dataclasses
import os
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from dotenv import dotenv_values

from ledgerkit.config.settings.base import Settings
from ledgerkit.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})

# keyed by annotation text; settings modules use postponed annotations
_COERCERS: dict[str, Callable[[str], Any]] = {
    "bool": lambda raw: raw.strip().lower() in _TRUTHY,
    "int": int,
    "float": float,
    "str": str,
}


def _coerce(raw: str, annotation: Any) -> Any:
    name = annotation if isinstance(annotation, str) else getattr(annotation, "__name__", "")
    return _COERCERS.get(name, str)(raw)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables (or any string mapping)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        values: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            key = settings_class.env_key(field.name)
            raw = environ.get(key)
            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(key)
                continue
            try:
                values[field.name] = _coerce(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc

        try:
            return settings_class(**values)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Cannot build {settings_class.__name__}: {exc}") from exc


class DotenvSettingsLoader(SettingsLoader):
    """Load settings from a ``.env`` file layered with the process environment.

    Process variables win over the file unless *override* is set.  The file
    is read with python-dotenv and never written into ``os.environ``.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        from_file = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        if self._override:
            merged = {**os.environ, **from_file}
        else:
            merged = {**from_file, **os.environ}
        return EnvSettingsLoader(merged).load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
