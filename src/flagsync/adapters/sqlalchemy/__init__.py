"""SQLAlchemy adapter – async Core record store."""
from flagsync.adapters.sqlalchemy.record_store import SqlAlchemyRecordStore

__all__ = ["SqlAlchemyRecordStore"]
