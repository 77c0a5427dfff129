"""
Repository layer exports.
"""

from db.repositories.errors import (
    DomainStateLoadError,
    DomainStatePersistenceError,
    SnapshotCacheError,
    SnapshotRepositoryError,
)
from db.repositories.storage import LocalSnapshotCache

__all__ = [
    "LocalSnapshotCache",
    "SnapshotRepositoryError",
    "DomainStateLoadError",
    "DomainStatePersistenceError",
    "SnapshotCacheError",
]
