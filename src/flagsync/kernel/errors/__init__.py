"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   └── NotFoundError
    │       └── CollectionNotFoundError
    └── InfrastructureError      (infrastructure.py)
        └── StoreError
            ├── StoreUnavailableError
            ├── QueryFailedError
            └── WriteFailedError
"""

from flagsync.kernel.errors.base import BaseError
from flagsync.kernel.errors.domain import (
    CollectionNotFoundError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from flagsync.kernel.errors.infrastructure import (
    InfrastructureError,
    QueryFailedError,
    StoreError,
    StoreUnavailableError,
    WriteFailedError,
)

__all__ = [
    "BaseError",
    "CollectionNotFoundError",
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "QueryFailedError",
    "StoreError",
    "StoreUnavailableError",
    "ValidationError",
    "WriteFailedError",
]
