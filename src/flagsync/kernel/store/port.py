"""Kernel store – RecordStore port."""
from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import Any

from flagsync.kernel.store.record import CollectionDescriptor, Record


class RecordStore(abc.ABC):
    """Port: persistent collections of named records.

    Every operation is scoped to a single collection and is independent of
    the others; implementations offer no transaction spanning several calls.

    Failures are reported with the kernel error hierarchy:

    * :class:`~flagsync.kernel.errors.CollectionNotFoundError` when the
      collection does not exist,
    * :class:`~flagsync.kernel.errors.QueryFailedError` /
      :class:`~flagsync.kernel.errors.StoreUnavailableError` for reads,
    * :class:`~flagsync.kernel.errors.WriteFailedError` for inserts and deletes.
    """

    @abc.abstractmethod
    async def query_all(self, collection: str) -> list[Record]:
        """Return every record in *collection* in store-iteration order."""

    @abc.abstractmethod
    async def query_by_field(self, collection: str, field: str, value: Any) -> list[Record]:
        """Return records in *collection* whose *field* equals *value*."""

    @abc.abstractmethod
    async def resolve_collection(self, collection: str) -> CollectionDescriptor: ...

    @abc.abstractmethod
    async def insert(self, descriptor: CollectionDescriptor, fields: Mapping[str, Any]) -> Record: ...

    @abc.abstractmethod
    async def delete(self, record: Record) -> None: ...


__all__ = ["RecordStore"]
