"""
flagsync – feature-flag registry reconciled against a persistent record store.

Import path convention::

    from flagsync.application.feature_flags import FlagRegistry, set_flags
    from flagsync.application.store import InMemoryRecordStore
    from flagsync.adapters.sqlalchemy import SqlAlchemyRecordStore
    from flagsync.kernel.errors import CollectionNotFoundError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
