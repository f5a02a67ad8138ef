"""Config – 12-factor settings and loaders."""

from ledgerkit.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    EventSourcingSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from ledgerkit.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "EventSourcingSettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
