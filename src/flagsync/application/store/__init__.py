"""Application store – in-memory RecordStore implementation."""
from flagsync.application.store.in_memory import InMemoryRecordStore

__all__ = ["InMemoryRecordStore"]
