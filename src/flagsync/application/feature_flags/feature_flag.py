"""Application feature flags – FeatureFlag value object."""
from __future__ import annotations

import dataclasses

from flagsync.kernel.errors import ValidationError


@dataclasses.dataclass(frozen=True)
class FeatureFlag:
    """A flag is identified solely by its name."""

    name: str

    def __post_init__(self) -> None:
        validate_flag_name(self.name)

    def __str__(self) -> str:
        return self.name


def validate_flag_name(name: object) -> str:
    """Return *name* unchanged or raise :class:`ValidationError`."""
    if not isinstance(name, str):
        raise ValidationError(
            "Flag name must be a string",
            errors=[{"field": "name", "value": repr(name), "reason": "not_a_string"}],
        )
    if not name:
        raise ValidationError(
            "Flag name must not be empty",
            errors=[{"field": "name", "value": name, "reason": "empty"}],
        )
    return name


__all__ = ["FeatureFlag", "validate_flag_name"]
