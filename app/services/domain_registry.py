"""
app/services/domain_registry.py

In-memory DomainCollection shared by the request handlers.

The registry is the only place the collection changes. Services replace a
domain's state wholesale after its remote save has succeeded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Sequence

from app.consolidation.aggregator import aggregate_domains
from app.domain.sales import ALL_DOMAINS, ALL_DOMAINS_ALIASES, DomainCollection, DomainState

logger = logging.getLogger(__name__)


class UnknownDomainError(LookupError):
    """
    Raised when a request names a domain that is neither configured nor stored.
    """

    def __init__(self, domain: str) -> None:
        super().__init__(f"Unknown domain: {domain!r}.")
        self.domain = domain


def is_all_domains(name: str) -> bool:
    return name.strip().lower() in ALL_DOMAINS_ALIASES


class DomainRegistry:
    """
    Holds every domain's current state plus the configured display order.
    """

    def __init__(
        self,
        *,
        domains: Sequence[str],
        collection: Mapping[str, DomainState] | None = None,
    ) -> None:
        self._domains = tuple(domains)
        self._collection: DomainCollection = dict(collection or {})
        self._write_lock = asyncio.Lock()

    @property
    def write_lock(self) -> asyncio.Lock:
        """
        Serializes upload and purge flows so each reads the state it replaces.
        """

        return self._write_lock

    @property
    def domains(self) -> tuple[str, ...]:
        """
        Configured domains first, then any stored domain that is not configured.
        """

        extra = tuple(name for name in self._collection if name not in self._domains)
        return self._domains + extra

    def resolve(self, name: str, *, allow_all: bool = False) -> str:
        """
        Return the display name for ``name`` (case-insensitive).

        ``ALL_DOMAINS`` is returned for the aggregate aliases when ``allow_all``
        is set; otherwise they are rejected like any unknown name.
        """

        cleaned = (name or "").strip()
        if is_all_domains(cleaned):
            if allow_all:
                return ALL_DOMAINS
            raise UnknownDomainError(cleaned)
        for candidate in self.domains:
            if candidate.lower() == cleaned.lower():
                return candidate
        raise UnknownDomainError(cleaned)

    def get(self, name: str) -> DomainState | None:
        return self._collection.get(name)

    def view(self, name: str) -> DomainState | None:
        """
        Current state of one domain, or the normalized aggregate for ``all``.
        """

        resolved = self.resolve(name, allow_all=True)
        if resolved == ALL_DOMAINS:
            return aggregate_domains(self._collection, self._domains)
        return self._collection.get(resolved)

    def populated(self) -> list[str]:
        populated: list[str] = []
        for name in self.domains:
            state = self._collection.get(name)
            if state is not None and not state.is_empty:
                populated.append(name)
        return populated

    def snapshot(self) -> DomainCollection:
        return dict(self._collection)

    def commit(self, name: str, state: DomainState) -> None:
        self._collection[name] = state
        logger.debug("Domain state committed domain=%s records=%d", name, len(state.records))

    def replace_all(self, collection: Mapping[str, DomainState]) -> None:
        self._collection = dict(collection)


class DomainHasNoDataError(LookupError):
    """
    Raised when an operation needs records but the domain has none.
    """

    def __init__(self, domain: str) -> None:
        super().__init__(f"No data available for {domain}.")
        self.domain = domain
