"""Config – 12-factor settings and loaders."""

from flagsync.config.settings import EnvSettingsLoader, FlagSettings, Settings, SettingsLoader
from flagsync.config.validation import ConfigError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "FlagSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
