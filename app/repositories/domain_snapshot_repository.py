"""
app/repositories/domain_snapshot_repository.py

Persistence layer for per-domain snapshots.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from app.domain.sales import DomainState
from db.models.domain_snapshot import DomainSnapshot


def domain_key(domain: str) -> str:
    return domain.strip().lower()


class DomainSnapshotRepository:
    """
    Repository for reading and upserting whole-domain snapshots.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_all(self) -> list[DomainSnapshot]:
        stmt = select(DomainSnapshot).order_by(DomainSnapshot.domain_key)
        return list(self._session.execute(stmt).scalars().all())

    def get(self, domain: str) -> DomainSnapshot | None:
        return self._session.get(DomainSnapshot, domain_key(domain))

    def upsert(self, *, domain: str, state: DomainState) -> int:
        """
        Insert or replace the snapshot row for ``domain``; returns the stored record count.
        """

        payload: dict[str, Any] = state.to_payload()
        values = {
            "domain_key": domain_key(domain),
            "display_name": domain,
            "records_json": payload["records"],
            "mapping_json": payload["mapping"],
            "record_count": len(state.records),
        }
        stmt = insert(DomainSnapshot).values(values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[DomainSnapshot.domain_key],
            set_={
                "display_name": stmt.excluded.display_name,
                "records_json": stmt.excluded.records_json,
                "mapping_json": stmt.excluded.mapping_json,
                "record_count": stmt.excluded.record_count,
                "updated_at": func.now(),
            },
        )
        self._session.execute(stmt)
        return values["record_count"]
