"""Infrastructure errors — record store I/O failures."""

from __future__ import annotations

from typing import Any

from flagsync.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class StoreError(InfrastructureError):
    """The record store failed to serve a request."""

    default_code = "store_error"

    def __init__(
        self,
        message: str,
        *,
        collection: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.collection = collection
        if collection is not None:
            self.detail.setdefault("collection", collection)


class StoreUnavailableError(StoreError):
    """Could not reach the record store at all."""

    default_code = "store_unavailable"


class QueryFailedError(StoreError):
    """The store could not answer a read query."""

    default_code = "query_failed"


class WriteFailedError(StoreError):
    """The store rejected an insert or delete."""

    default_code = "write_failed"

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation
        self.detail.setdefault("operation", operation)


__all__ = [
    "InfrastructureError",
    "QueryFailedError",
    "StoreError",
    "StoreUnavailableError",
    "WriteFailedError",
]
