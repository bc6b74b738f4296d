"""SettingsFactory: how the CLI turns dotenv, environment and options into FlagSettings."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from flagsync.config.settings.base import Settings
from flagsync.config.settings.loaders import SettingsLoader
from flagsync.config.validation.errors import (
    ConfigError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)


class SettingsFactory:
    """Layer loaders, then command-line overrides, into one settings object.

    A loader failure propagates; an invalid ``FLAGS_*`` value is reported
    rather than skipped.  ``None`` overrides stand for options such as
    ``--collection`` that were not given.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """Raise :class:`MissingRequiredSettingError` or :class:`ConfigError` on bad input."""
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            instance = loader.load(settings_cls)
            for field in dataclasses.fields(instance):  # type: ignore[arg-type]
                merged[field.name] = getattr(instance, field.name)

        if overrides:
            merged.update({k: v for k, v in overrides.items() if v is not None})

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name in merged:
                continue
            if (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
            ):
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}", cause=exc) from exc


__all__ = ["SettingsFactory"]
