"""
app/repositories/domain_state_store.py

Remote storage for domain states, backed by PostgreSQL snapshots with a
local JSON cache fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.sales import DomainState
from app.repositories.domain_snapshot_repository import DomainSnapshotRepository, domain_key
from db.repositories.errors import (
    DomainStateLoadError,
    DomainStatePersistenceError,
    SnapshotCacheError,
)
from db.repositories.storage import LocalSnapshotCache

logger = logging.getLogger(__name__)

SessionScope = Callable[[], AbstractContextManager[Session]]


class DomainStateBackend(Protocol):
    """
    Storage contract consumed by the upload and purge services.
    """

    def save(self, domain: str, state: DomainState) -> None:
        ...

    def load_all(self) -> dict[str, DomainState]:
        ...


class DomainStateStore:
    """
    Saves and loads whole-domain snapshots.

    Each call opens its own session, so saves may run concurrently from
    worker threads.
    """

    def __init__(
        self,
        *,
        domains: Sequence[str],
        session_scope: SessionScope | None = None,
        cache: LocalSnapshotCache | None = None,
    ) -> None:
        self._domains = tuple(domains)
        self._session_scope = session_scope
        self._cache = cache

    def _scope(self) -> AbstractContextManager[Session]:
        if self._session_scope is None:
            from db.session import session_scope

            self._session_scope = session_scope
        return self._session_scope()

    def display_name(self, key_or_name: str) -> str:
        key = domain_key(key_or_name)
        for name in self._domains:
            if domain_key(name) == key:
                return name
        return key_or_name

    def save(self, domain: str, state: DomainState) -> None:
        """
        Persist ``state`` as the whole dataset of ``domain``.

        Raises DomainStatePersistenceError when the remote write fails.
        """

        try:
            with self._scope() as db:
                stored = DomainSnapshotRepository(db).upsert(domain=domain, state=state)
        except SQLAlchemyError as exc:
            logger.error("Snapshot save failed domain=%s error=%s", domain, exc)
            raise DomainStatePersistenceError(
                domain,
                f"Failed to save data for {domain}. Ensure the snapshot table exists and the database is reachable.",
            ) from exc

        logger.info("Snapshot saved domain=%s records=%d", domain, stored)
        self._refresh_cache(domain, state)

    def load_all(self) -> dict[str, DomainState]:
        """
        Load every stored domain; domains without a row are simply absent.
        """

        try:
            with self._scope() as db:
                snapshots = DomainSnapshotRepository(db).get_all()
                collection = {
                    self.display_name(snapshot.display_name or snapshot.domain_key): DomainState.from_payload(
                        {"records": snapshot.records_json, "mapping": snapshot.mapping_json}
                    )
                    for snapshot in snapshots
                }
        except SQLAlchemyError as exc:
            raise DomainStateLoadError("Failed to load domain snapshots from remote storage.") from exc

        if self._cache is not None:
            try:
                self._cache.write_all(collection)
            except SnapshotCacheError as exc:
                logger.warning("Snapshot cache refresh failed: %s", exc)
        return collection

    def load_with_fallback(self) -> tuple[dict[str, DomainState], str]:
        """
        Remote load, falling back to the local cache. Returns ``(collection, source)``.
        """

        try:
            return self.load_all(), "remote"
        except DomainStateLoadError as exc:
            logger.warning("Remote snapshot load failed, falling back to local cache: %s", exc.__cause__ or exc)

        if self._cache is None:
            return {}, "empty"
        try:
            cached = self._cache.load()
        except SnapshotCacheError as exc:
            logger.warning("Local snapshot cache unavailable: %s", exc)
            return {}, "empty"
        return {self.display_name(name): state for name, state in cached.items()}, "cache"

    def _refresh_cache(self, domain: str, state: DomainState) -> None:
        if self._cache is None:
            return
        try:
            self._cache.update(domain, state)
        except SnapshotCacheError as exc:
            logger.warning("Snapshot cache update failed domain=%s: %s", domain, exc)
