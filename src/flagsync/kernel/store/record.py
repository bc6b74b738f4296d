"""Kernel store – Record and CollectionDescriptor value objects."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any


@dataclasses.dataclass(frozen=True)
class CollectionDescriptor:
    """Resolved handle for a named collection in a record store."""

    name: str
    fields: tuple[str, ...] = ()
    unique_fields: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class Record:
    """A stored record: a stable ``id`` plus its field values.

    ``id`` is assigned by the store on insert and never changes for the
    lifetime of the record.
    """

    id: str
    collection: str
    fields: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, field: str, default: Any = None) -> Any:
        return self.fields.get(field, default)

    def get_string(self, field: str) -> str:
        """Return *field* as ``str``; missing or ``None`` values read as ``""``."""
        value = self.fields.get(field)
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


__all__ = ["CollectionDescriptor", "Record"]
