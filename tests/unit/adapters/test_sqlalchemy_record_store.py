"""Unit tests for SqlAlchemyRecordStore.

Uses an in-memory SQLite database via *aiosqlite* — no running server needed.
"""
from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, text

from flagsync.adapters.sqlalchemy import SqlAlchemyRecordStore
from flagsync.application.feature_flags import FlagRegistry, is_enabled, list_flags, set_flags
from flagsync.kernel.errors import (
    CollectionNotFoundError,
    QueryFailedError,
    StoreUnavailableError,
    WriteFailedError,
)
from flagsync.kernel.store import RECORD_ID_LENGTH, Record

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_store() -> SqlAlchemyRecordStore:
    return SqlAlchemyRecordStore.from_url("sqlite+aiosqlite:///:memory:", echo=False)


async def _ready_store() -> SqlAlchemyRecordStore:
    store = _make_store()
    await store.create_collection("features")
    return store


def _run(coro_factory):
    """Run ``coro_factory(store)`` against a fresh store with a flag table."""

    async def main():
        store = await _ready_store()
        try:
            return await coro_factory(store)
        finally:
            await store.dispose()

    return asyncio.run(main())


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestCollections:
    def test_create_and_resolve(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            return await store.resolve_collection("features")

        descriptor = _run(scenario)
        assert descriptor.name == "features"
        assert set(descriptor.fields) == {"name", "created_at"}
        assert descriptor.unique_fields == ("name",)

    def test_create_twice_is_harmless(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            await store.create_collection("features")
            return await store.query_all("features")

        assert _run(scenario) == []

    def test_unknown_collection(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            with pytest.raises(CollectionNotFoundError):
                await store.resolve_collection("missing")
            with pytest.raises(CollectionNotFoundError):
                await store.query_all("missing")

        _run(scenario)

    def test_table_without_id_column_is_rejected(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            meta = MetaData()
            Table("legacy", meta, Column("pk", Integer, primary_key=True), Column("name", String(50)))
            async with store.engine.begin() as conn:
                await conn.run_sync(meta.create_all)
            with pytest.raises(QueryFailedError):
                await store.query_all("legacy")

        _run(scenario)

    def test_custom_id_column(self) -> None:
        async def main():
            store = SqlAlchemyRecordStore.from_url("sqlite+aiosqlite:///:memory:")
            meta = MetaData()
            Table("legacy", meta, Column("pk", String(32), primary_key=True), Column("name", String(50)))
            async with store.engine.begin() as conn:
                await conn.run_sync(meta.create_all)
                await conn.execute(text("INSERT INTO legacy (pk, name) VALUES ('k1', 'old')"))
            custom = SqlAlchemyRecordStore(store.engine, id_column="pk")
            try:
                return await custom.query_all("legacy")
            finally:
                await store.dispose()

        (record,) = asyncio.run(main())
        assert record.id == "k1"
        assert record.get_string("name") == "old"


# ---------------------------------------------------------------------------
# Reads and writes
# ---------------------------------------------------------------------------


class TestRecords:
    def test_insert_and_query(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            descriptor = await store.resolve_collection("features")
            inserted = await store.insert(descriptor, {"name": "dark_mode"})
            return inserted, await store.query_all("features")

        inserted, records = _run(scenario)
        assert len(inserted.id) == RECORD_ID_LENGTH
        assert [r.id for r in records] == [inserted.id]
        assert records[0].get_string("name") == "dark_mode"
        assert records[0].collection == "features"

    def test_query_by_field(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            descriptor = await store.resolve_collection("features")
            await store.insert(descriptor, {"name": "a"})
            await store.insert(descriptor, {"name": "b"})
            return await store.query_by_field("features", "name", "b")

        assert [r.get_string("name") for r in _run(scenario)] == ["b"]

    def test_query_by_unknown_field(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            with pytest.raises(QueryFailedError):
                await store.query_by_field("features", "colour", "red")

        _run(scenario)

    def test_duplicate_name_is_write_failure(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            descriptor = await store.resolve_collection("features")
            await store.insert(descriptor, {"name": "a"})
            with pytest.raises(WriteFailedError) as info:
                await store.insert(descriptor, {"name": "a"})
            return info.value

        err = _run(scenario)
        assert err.operation == "insert"
        assert err.collection == "features"
        assert err.cause is not None

    def test_delete(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            descriptor = await store.resolve_collection("features")
            record = await store.insert(descriptor, {"name": "a"})
            await store.delete(record)
            return await store.query_all("features")

        assert _run(scenario) == []

    def test_delete_missing_record(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            with pytest.raises(WriteFailedError):
                await store.delete(Record(id="nope", collection="features"))

        _run(scenario)

    def test_dropped_table_is_collection_not_found(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            await store.query_all("features")
            async with store.engine.begin() as conn:
                await conn.execute(text("DROP TABLE features"))
            with pytest.raises(CollectionNotFoundError):
                await store.query_all("features")
            with pytest.raises(CollectionNotFoundError):
                await store.resolve_collection("features")

            await store.create_collection("features")
            return await store.query_all("features")

        assert _run(scenario) == []

    def test_invalid_url_is_store_unavailable(self) -> None:
        with pytest.raises(StoreUnavailableError):
            SqlAlchemyRecordStore.from_url("not a url")

    def test_sync_driver_is_store_unavailable(self) -> None:
        with pytest.raises(StoreUnavailableError) as info:
            SqlAlchemyRecordStore.from_url("sqlite:///flags.db")
        assert info.value.detail["database_url"] == "sqlite:///flags.db"


# ---------------------------------------------------------------------------
# Registry over SQLite
# ---------------------------------------------------------------------------


class TestRegistryOverSqlite:
    def test_empty(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            return await is_enabled(store, "test"), await list_flags(store)

        assert _run(scenario) == (False, [])

    def test_transition_scenario(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            seen = []
            for desired in (["test"], ["test2"], ["test", "test2"]):
                await set_flags(store, desired)
                seen.append(sorted(await list_flags(store)))
            return seen

        assert _run(scenario) == [["test"], ["test2"], ["test", "test2"]]

    def test_kept_record_keeps_id(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            await set_flags(store, ["a"])
            (before,) = await store.query_all("features")
            await set_flags(store, ["a", "b"])
            after = {r.get_string("name"): r.id for r in await store.query_all("features")}
            return before.id, after

        before_id, after = _run(scenario)
        assert after["a"] == before_id
        assert set(after) == {"a", "b"}

    def test_second_call_is_a_no_op(self) -> None:
        async def scenario(store: SqlAlchemyRecordStore):
            registry = FlagRegistry(store)
            await registry.set_flags(["a", "b"])
            return await registry.set_flags(["a", "b"])

        result = _run(scenario)
        assert result.changed is False
        assert sorted(result.kept) == ["a", "b"]

    def test_missing_table_is_fail_closed(self) -> None:
        async def main():
            store = _make_store()
            try:
                return await is_enabled(store, "test")
            finally:
                await store.dispose()

        assert asyncio.run(main()) is False
