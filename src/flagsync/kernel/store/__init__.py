"""Kernel store – record store port and value objects."""
from flagsync.kernel.store.ids import RECORD_ID_LENGTH, new_record_id
from flagsync.kernel.store.port import RecordStore
from flagsync.kernel.store.record import CollectionDescriptor, Record

__all__ = ["RECORD_ID_LENGTH", "CollectionDescriptor", "Record", "RecordStore", "new_record_id"]
