"""SQLAlchemy adapter – SqlAlchemyRecordStore.

One table per collection, addressed by a string primary key column (``id``
by default).  Tables are reflected on first use and cached; the flag table
itself can be created with :meth:`SqlAlchemyRecordStore.create_collection`.

Only SQLAlchemy 2.x Core is used, so no ORM model has to be declared.
Every operation runs on its own connection; writes commit immediately.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    delete,
    func,
    inspect,
    insert,
    select,
)
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from flagsync.config.settings.base import FEATURE_COLLECTION_NAME
from flagsync.kernel.errors import (
    CollectionNotFoundError,
    QueryFailedError,
    StoreError,
    StoreUnavailableError,
    WriteFailedError,
)
from flagsync.kernel.store import RECORD_ID_LENGTH, CollectionDescriptor, Record, RecordStore, new_record_id

_UNAVAILABLE = (sa_exc.InterfaceError, sa_exc.DisconnectionError, sa_exc.TimeoutError, OSError)


def _is_unavailable(exc: BaseException) -> bool:
    if isinstance(exc, sa_exc.DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, _UNAVAILABLE)


class SqlAlchemyRecordStore(RecordStore):
    """Async SQLAlchemy-backed record store."""

    def __init__(self, engine: AsyncEngine, *, id_column: str = "id") -> None:
        self._engine = engine
        self._id_column = id_column
        self._tables: dict[str, Table] = {}

    @classmethod
    def from_url(cls, database_url: str, **engine_kwargs: Any) -> "SqlAlchemyRecordStore":
        """Build a store on a fresh :class:`AsyncEngine` for *database_url*.

        Raises :class:`StoreUnavailableError` for an unparsable URL or a
        driver without asyncio support.
        """
        try:
            engine = create_async_engine(database_url, **engine_kwargs)
        except (sa_exc.ArgumentError, sa_exc.InvalidRequestError) as exc:
            raise StoreUnavailableError(
                f"Cannot open record store: {exc}", detail={"database_url": database_url}, cause=exc
            ) from exc
        return cls(engine)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def dispose(self) -> None:
        await self._engine.dispose()

    # ------------------------------------------------------------------
    # Schema helpers
    # ------------------------------------------------------------------

    async def create_collection(self, name: str = FEATURE_COLLECTION_NAME) -> CollectionDescriptor:
        """Create the flag table *name* (``id``, unique ``name``, ``created_at``).

        Existing tables are left as they are.
        """
        meta = MetaData()
        Table(
            name,
            meta,
            Column(self._id_column, String(RECORD_ID_LENGTH), primary_key=True),
            Column("name", String(255), nullable=False),
            Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
            UniqueConstraint("name", name=f"uq_{name}_name"),
        )
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(meta.create_all)
        except (sa_exc.SQLAlchemyError, OSError) as exc:
            raise self._store_error(exc, name, "Could not create collection", WriteFailedError, "create") from exc
        self._tables.pop(name, None)
        return await self.resolve_collection(name)

    def _reflect(self, sync_conn: Any, name: str) -> Table | None:
        if not inspect(sync_conn).has_table(name):
            return None
        return Table(name, MetaData(), autoload_with=sync_conn)

    async def _table(self, collection: str) -> Table:
        table = self._tables.get(collection)
        if table is not None:
            return table
        try:
            async with self._engine.connect() as conn:
                table = await conn.run_sync(self._reflect, collection)
        except (sa_exc.SQLAlchemyError, OSError) as exc:
            raise self._store_error(exc, collection, "Could not resolve collection", QueryFailedError) from exc
        if table is None:
            raise CollectionNotFoundError(collection)
        if self._id_column not in table.c:
            raise QueryFailedError(
                f"Collection '{collection}' has no '{self._id_column}' column",
                collection=collection,
            )
        self._tables[collection] = table
        return table

    # ------------------------------------------------------------------
    # RecordStore interface
    # ------------------------------------------------------------------

    async def query_all(self, collection: str) -> list[Record]:
        table = await self._table(collection)
        return await self._fetch(collection, select(table))

    async def query_by_field(self, collection: str, field: str, value: Any) -> list[Record]:
        table = await self._table(collection)
        if field not in table.c:
            raise QueryFailedError(f"Collection '{collection}' has no field '{field}'", collection=collection)
        return await self._fetch(collection, select(table).where(table.c[field] == value))

    async def resolve_collection(self, collection: str) -> CollectionDescriptor:
        table = await self._table(collection)
        unique: list[str] = [c.name for c in table.columns if c.unique and not c.primary_key]
        for constraint in table.constraints:
            if isinstance(constraint, UniqueConstraint) and len(constraint.columns) == 1:
                unique.extend(c.name for c in constraint.columns)
        for index in table.indexes:
            if index.unique and len(index.columns) == 1:
                unique.extend(c.name for c in index.columns)
        return CollectionDescriptor(
            name=collection,
            fields=tuple(c.name for c in table.columns if c.name != self._id_column),
            unique_fields=tuple(dict.fromkeys(unique)),
        )

    async def insert(self, descriptor: CollectionDescriptor, fields: Mapping[str, Any]) -> Record:
        table = await self._table(descriptor.name)
        record_id = new_record_id()
        stmt = insert(table).values({self._id_column: record_id, **fields})
        try:
            async with self._engine.begin() as conn:
                await conn.execute(stmt)
        except (sa_exc.SQLAlchemyError, OSError) as exc:
            self._tables.pop(descriptor.name, None)
            raise self._store_error(exc, descriptor.name, "Insert failed", WriteFailedError, "insert") from exc
        return Record(id=record_id, collection=descriptor.name, fields=fields)

    async def delete(self, record: Record) -> None:
        table = await self._table(record.collection)
        stmt = delete(table).where(table.c[self._id_column] == record.id)
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
        except (sa_exc.SQLAlchemyError, OSError) as exc:
            self._tables.pop(record.collection, None)
            raise self._store_error(exc, record.collection, "Delete failed", WriteFailedError, "delete") from exc
        if result.rowcount == 0:
            raise WriteFailedError(
                f"Record '{record.id}' not found",
                operation="delete",
                collection=record.collection,
            )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _dropped(self, collection: str) -> bool:
        """Forget the cached table; ``True`` if it no longer exists."""
        self._tables.pop(collection, None)
        try:
            async with self._engine.connect() as conn:
                return not await conn.run_sync(lambda c: inspect(c).has_table(collection))
        except (sa_exc.SQLAlchemyError, OSError):
            return False

    async def _fetch(self, collection: str, stmt: Any) -> list[Record]:
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(stmt)
                rows = result.mappings().all()
        except (sa_exc.SQLAlchemyError, OSError) as exc:
            if not _is_unavailable(exc) and await self._dropped(collection):
                raise CollectionNotFoundError(collection, cause=exc) from exc
            raise self._store_error(exc, collection, "Query failed", QueryFailedError) from exc
        records: list[Record] = []
        for row in rows:
            fields = dict(row)
            record_id = fields.pop(self._id_column)
            records.append(Record(id=str(record_id), collection=collection, fields=fields))
        return records

    @staticmethod
    def _store_error(
        exc: BaseException,
        collection: str,
        message: str,
        error_cls: type[StoreError],
        operation: str | None = None,
    ) -> StoreError:
        if _is_unavailable(exc):
            return StoreUnavailableError(
                f"Record store unavailable: {exc}", collection=collection, cause=exc
            )
        if error_cls is WriteFailedError:
            return WriteFailedError(
                f"{message}: {exc}", operation=operation or "write", collection=collection, cause=exc
            )
        return error_cls(f"{message}: {exc}", collection=collection, cause=exc)


__all__ = ["SqlAlchemyRecordStore"]
