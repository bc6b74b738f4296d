"""Testing fakes – in-memory doubles for the record store port."""
from flagsync.application.store import InMemoryRecordStore
from flagsync.testing.fakes.record_store import FaultInjectingRecordStore, StoreCall

__all__ = ["FaultInjectingRecordStore", "InMemoryRecordStore", "StoreCall"]
