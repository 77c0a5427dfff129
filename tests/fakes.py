"""
tests/fakes.py

In-memory stand-ins for the storage backend used by service tests.
"""

from __future__ import annotations

from app.domain.sales import DomainState
from db.repositories.errors import DomainStatePersistenceError


class InMemoryStateStore:
    """
    DomainStateBackend that keeps saves in a dict and can fail per domain.
    """

    def __init__(self, *, failing: set[str] | None = None) -> None:
        self.saved: dict[str, DomainState] = {}
        self.save_calls: list[str] = []
        self.failing = set(failing or ())

    def save(self, domain: str, state: DomainState) -> None:
        self.save_calls.append(domain)
        if domain in self.failing:
            raise DomainStatePersistenceError(domain, f"Failed to save data for {domain}.")
        self.saved[domain] = state

    def load_all(self) -> dict[str, DomainState]:
        return dict(self.saved)
