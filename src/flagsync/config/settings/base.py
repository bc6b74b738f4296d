"""Config settings – Settings base class and FlagSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from flagsync.config.validation.errors import InvalidSettingValueError

FEATURE_COLLECTION_NAME = "features"
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///flags.db"

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class FlagSettings(Settings):
    """Settings for the flag registry, read from ``FLAGS_*`` variables."""

    _prefix: ClassVar[str] = "FLAGS"

    database_url: str = DEFAULT_DATABASE_URL
    collection_name: str = FEATURE_COLLECTION_NAME
    log_level: str = "INFO"
    log_json: bool = False

    def _validate(self) -> None:
        if not self.database_url:
            raise InvalidSettingValueError("database_url", self.database_url, "must not be empty")
        if not self.collection_name or not self.collection_name.strip():
            raise InvalidSettingValueError("collection_name", self.collection_name, "must not be empty")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise InvalidSettingValueError(
                "log_level", self.log_level, f"expected one of {sorted(_LOG_LEVELS)}"
            )
        self.log_level = self.log_level.upper()

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


__all__ = ["DEFAULT_DATABASE_URL", "FEATURE_COLLECTION_NAME", "FlagSettings", "Settings"]
