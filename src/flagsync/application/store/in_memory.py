"""Application store – InMemoryRecordStore."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from flagsync.kernel.errors import CollectionNotFoundError, WriteFailedError
from flagsync.kernel.store import CollectionDescriptor, Record, RecordStore, new_record_id


class InMemoryRecordStore(RecordStore):
    """Dict-backed record store.

    Collections must be created with :meth:`create_collection` before use.
    Records keep insertion order and their ids never change, so callers can
    check identity across calls.
    """

    def __init__(self, collections: Iterable[str] = ()) -> None:
        self._descriptors: dict[str, CollectionDescriptor] = {}
        self._records: dict[str, dict[str, Record]] = {}
        for name in collections:
            self.create_collection(name)

    def create_collection(
        self,
        name: str,
        fields: Iterable[str] = ("name",),
        unique: Iterable[str] = ("name",),
    ) -> CollectionDescriptor:
        """Register *name*; a no-op returning the existing descriptor if present."""
        if name in self._descriptors:
            return self._descriptors[name]
        descriptor = CollectionDescriptor(name=name, fields=tuple(fields), unique_fields=tuple(unique))
        self._descriptors[name] = descriptor
        self._records[name] = {}
        return descriptor

    def drop_collection(self, name: str) -> None:
        self._descriptors.pop(name, None)
        self._records.pop(name, None)

    def _collection(self, name: str) -> dict[str, Record]:
        try:
            return self._records[name]
        except KeyError:
            raise CollectionNotFoundError(name) from None

    async def query_all(self, collection: str) -> list[Record]:
        return list(self._collection(collection).values())

    async def query_by_field(self, collection: str, field: str, value: Any) -> list[Record]:
        return [r for r in self._collection(collection).values() if r.get(field) == value]

    async def resolve_collection(self, collection: str) -> CollectionDescriptor:
        try:
            return self._descriptors[collection]
        except KeyError:
            raise CollectionNotFoundError(collection) from None

    async def insert(self, descriptor: CollectionDescriptor, fields: Mapping[str, Any]) -> Record:
        records = self._records.get(descriptor.name)
        if records is None:
            raise WriteFailedError(
                f"Collection '{descriptor.name}' no longer exists",
                operation="insert",
                collection=descriptor.name,
            )
        for field in descriptor.unique_fields:
            if field in fields and any(r.get(field) == fields[field] for r in records.values()):
                raise WriteFailedError(
                    f"Duplicate value {fields[field]!r} for unique field '{field}'",
                    operation="insert",
                    collection=descriptor.name,
                )
        record = Record(id=new_record_id(), collection=descriptor.name, fields=fields)
        records[record.id] = record
        return record

    async def delete(self, record: Record) -> None:
        records = self._records.get(record.collection)
        if records is None or record.id not in records:
            raise WriteFailedError(
                f"Record '{record.id}' not found",
                operation="delete",
                collection=record.collection,
            )
        del records[record.id]

    def all_records(self, collection: str) -> list[Record]:
        """Synchronous snapshot of *collection* for test assertions."""
        return list(self._collection(collection).values())


__all__ = ["InMemoryRecordStore"]
