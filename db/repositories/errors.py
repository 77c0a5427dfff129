"""
Repository-layer exceptions for snapshot storage flows.
"""

from __future__ import annotations


class SnapshotRepositoryError(Exception):
    """Base exception for snapshot storage failures."""


class DomainStateLoadError(SnapshotRepositoryError):
    """Raised when domain snapshots cannot be read from remote storage."""


class DomainStatePersistenceError(SnapshotRepositoryError):
    """Raised when a domain snapshot cannot be written to remote storage."""

    def __init__(self, domain: str, message: str) -> None:
        super().__init__(message)
        self.domain = domain


class SnapshotCacheError(SnapshotRepositoryError):
    """Raised when the local snapshot cache cannot be read or written."""
