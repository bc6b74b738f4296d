"""Application feature flags – registry over a record store."""
from flagsync.application.feature_flags.feature_flag import FeatureFlag, validate_flag_name
from flagsync.application.feature_flags.registry import (
    NAME_FIELD,
    FlagRegistry,
    ReconcileResult,
    is_enabled,
    list_flags,
    set_flags,
)

__all__ = [
    "FeatureFlag",
    "FlagRegistry",
    "NAME_FIELD",
    "ReconcileResult",
    "is_enabled",
    "list_flags",
    "set_flags",
    "validate_flag_name",
]
