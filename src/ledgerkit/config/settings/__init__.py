"""Config settings – 12-factor env-based configuration."""
from ledgerkit.config.settings.base import Settings
from ledgerkit.config.settings.event_sourcing import EventSourcingSettings
from ledgerkit.config.settings.factory import SettingsFactory
from ledgerkit.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "EventSourcingSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
