"""Config settings – 12-factor env-based configuration."""
from flagsync.config.settings.base import (
    DEFAULT_DATABASE_URL,
    FEATURE_COLLECTION_NAME,
    FlagSettings,
    Settings,
)
from flagsync.config.settings.factory import SettingsFactory
from flagsync.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "FEATURE_COLLECTION_NAME",
    "FlagSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
