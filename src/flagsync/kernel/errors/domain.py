"""Domain errors — invalid flag names and missing collections."""

from __future__ import annotations

from typing import Any

from flagsync.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class NotFoundError(DomainError):
    """The requested resource does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


class CollectionNotFoundError(NotFoundError):
    """The named collection does not exist in the record store."""

    default_code = "collection_not_found"

    def __init__(self, collection: str, **kwargs: Any) -> None:
        super().__init__("Collection", collection, **kwargs)
        self.collection = collection


__all__ = [
    "CollectionNotFoundError",
    "DomainError",
    "NotFoundError",
    "ValidationError",
]
