"""Application feature flags – registry operations over a RecordStore.

The registry keeps no state of its own: every call re-reads the flag
collection from the store.  ``set_flags`` applies the symmetric difference
between stored and desired names (deletes first, then inserts) and stops at
the first failure without undoing writes already applied.  Re-running it with
the full desired set converges.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from flagsync.application.feature_flags.feature_flag import FeatureFlag, validate_flag_name
from flagsync.config.settings.base import FEATURE_COLLECTION_NAME
from flagsync.kernel.errors import ValidationError
from flagsync.kernel.store import RecordStore
from flagsync.observability.logging import Logger, get_logger

NAME_FIELD = "name"

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class ReconcileResult:
    """Names touched by a :func:`set_flags` call."""

    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    kept: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


async def is_enabled(
    store: RecordStore,
    flag_name: str,
    *,
    collection: str = FEATURE_COLLECTION_NAME,
    logger: Logger | None = None,
) -> bool:
    """Return ``True`` iff a record named *flag_name* exists.

    A failing lookup is logged and reported as ``False``.
    """
    validate_flag_name(flag_name)
    log = logger or _log
    try:
        records = await store.query_by_field(collection, NAME_FIELD, flag_name)
    except Exception as exc:  # noqa: BLE001
        log.error("feature_flag_lookup_failed", flag=flag_name, collection=collection, exc=exc)
        return False
    # the store may over-match (e.g. case-insensitive collation)
    return any(r.get_string(NAME_FIELD) == flag_name for r in records)


async def list_flags(
    store: RecordStore,
    *,
    collection: str = FEATURE_COLLECTION_NAME,
) -> list[str]:
    """Return stored flag names in store order; store errors propagate."""
    records = await store.query_all(collection)
    return [r.get_string(NAME_FIELD) for r in records]


async def set_flags(
    store: RecordStore,
    desired_names: Iterable[str],
    *,
    collection: str = FEATURE_COLLECTION_NAME,
    logger: Logger | None = None,
) -> ReconcileResult:
    """Reconcile the stored flags to exactly *desired_names*.

    Records whose name is still desired are left untouched, so their ids
    survive.  Raises on the first store failure.
    """
    log = logger or _log
    if isinstance(desired_names, str):
        raise ValidationError(
            "Desired flags must be a collection of names, not a single string",
            errors=[{"field": "desired_names", "value": desired_names, "reason": "bare_string"}],
        )
    # dict keeps first-seen order while dropping duplicates
    desired = dict.fromkeys(validate_flag_name(n) for n in desired_names)

    descriptor = await store.resolve_collection(collection)
    records = await store.query_all(collection)

    removed: list[str] = []
    existing: set[str] = set()
    for record in records:
        name = record.get_string(NAME_FIELD)
        if name not in desired:
            await store.delete(record)
            removed.append(name)
            log.debug("feature_flag_removed", flag=name, collection=collection, record_id=record.id)
            continue
        existing.add(name)

    added: list[str] = []
    for name in desired:
        if name in existing:
            continue
        record = await store.insert(descriptor, {NAME_FIELD: name})
        added.append(name)
        log.debug("feature_flag_added", flag=name, collection=collection, record_id=record.id)

    result = ReconcileResult(
        added=tuple(added),
        removed=tuple(removed),
        kept=tuple(n for n in desired if n in existing),
    )
    log.info(
        "feature_flags_reconciled",
        collection=collection,
        added=len(result.added),
        removed=len(result.removed),
        kept=len(result.kept),
    )
    return result


class FlagRegistry:
    """Binds a :class:`RecordStore` and collection name for repeated use.

    Usage::

        registry = FlagRegistry(InMemoryRecordStore(["features"]))
        await registry.set_flags(["dark_mode"])
        assert await registry.is_enabled("dark_mode")
    """

    def __init__(
        self,
        store: RecordStore,
        collection: str = FEATURE_COLLECTION_NAME,
        logger: Logger | None = None,
    ) -> None:
        self._store = store
        self._collection = collection
        self._log = logger or get_logger(__name__, collection=collection)

    @property
    def collection(self) -> str:
        return self._collection

    async def is_enabled(self, flag: FeatureFlag | str) -> bool:
        name = flag.name if isinstance(flag, FeatureFlag) else flag
        return await is_enabled(self._store, name, collection=self._collection, logger=self._log)

    async def list_flags(self) -> list[str]:
        return await list_flags(self._store, collection=self._collection)

    async def set_flags(self, names: Iterable[FeatureFlag | str]) -> ReconcileResult:
        return await set_flags(
            self._store,
            (n.name if isinstance(n, FeatureFlag) else n for n in names),
            collection=self._collection,
            logger=self._log,
        )


__all__ = ["FlagRegistry", "NAME_FIELD", "ReconcileResult", "is_enabled", "list_flags", "set_flags"]
