"""
app/repositories package marker.
"""

from app.repositories.domain_snapshot_repository import DomainSnapshotRepository, domain_key
from app.repositories.domain_state_store import DomainStateBackend, DomainStateStore

__all__ = [
    "DomainSnapshotRepository",
    "DomainStateBackend",
    "DomainStateStore",
    "domain_key",
]
