"""
app/services/upload_service.py

Upload workflow: map columns, clean values, dedup-merge, persist, commit.

The in-memory domain changes only after the remote save succeeds, so a
failed save leaves both sides as they were.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Sequence

from app.consolidation.dedup import merge_records
from app.domain.sales import DomainState, UploadSummary
from app.mappers.value_coercion import json_safe_record, sanitize_numeric_columns
from app.repositories.domain_state_store import DomainStateBackend
from app.services.column_mapping_service import ColumnMappingService
from app.services.domain_registry import DomainRegistry
from app.services.file_ingestion_service import (
    EmptyUploadError,
    RemoteJSONFetcher,
    parse_upload,
)

logger = logging.getLogger(__name__)


class UploadService:
    """
    Coordinates one upload into one domain.
    """

    def __init__(
        self,
        *,
        registry: DomainRegistry,
        store: DomainStateBackend,
        mapping_service: ColumnMappingService,
        sample_rows: int = 5,
        fetcher: RemoteJSONFetcher | None = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._mapping_service = mapping_service
        self._sample_rows = max(1, sample_rows)
        self._fetcher = fetcher

    async def ingest_file(self, domain: str, *, filename: str | None, payload: bytes) -> UploadSummary:
        """
        Parse an uploaded CSV/XLS/XLSX file and merge it into ``domain``.
        """

        name = self._registry.resolve(domain)
        records = await asyncio.to_thread(parse_upload, filename, payload)
        return await self.ingest_records(name, records)

    async def ingest_url(self, domain: str, *, url: str) -> UploadSummary:
        """
        Fetch a remote JSON array and merge it into ``domain``.
        """

        if self._fetcher is None:
            raise RuntimeError("Remote import is not configured.")
        name = self._registry.resolve(domain)
        records = await asyncio.to_thread(self._fetcher.fetch_records, url)
        return await self.ingest_records(name, records)

    async def ingest_records(self, domain: str, records: Sequence[Mapping[str, Any]]) -> UploadSummary:
        """
        Merge raw records into ``domain`` and persist the new state.

        Raises:
            UnknownDomainError: ``domain`` is not configured (``all`` is rejected).
            EmptyUploadError: ``records`` is empty.
            DomainStatePersistenceError: the remote save failed; nothing changed.
        """

        name = self._registry.resolve(domain)
        if not records:
            raise EmptyUploadError()

        headers = [str(header) for header in records[0].keys()]
        sample = [json_safe_record(row) for row in records[: self._sample_rows]]
        resolution = await asyncio.to_thread(self._mapping_service.map_columns, headers, sample)

        prepared = [json_safe_record(sanitize_numeric_columns(row, resolution.mapping)) for row in records]

        async with self._registry.write_lock:
            current = self._registry.get(name)
            existing = current.records if current is not None else ()
            merge = merge_records(existing, prepared)
            new_state = DomainState(records=merge.records, mapping=dict(resolution.mapping))

            await asyncio.to_thread(self._store.save, name, new_state)
            self._registry.commit(name, new_state)

        logger.info(
            "Upload merged domain=%s added=%d duplicates=%d total=%d mapping_source=%s",
            name,
            merge.added,
            merge.duplicates,
            len(merge.records),
            resolution.source,
        )
        return UploadSummary(
            domain=name,
            added=merge.added,
            duplicates=merge.duplicates,
            total_records=len(merge.records),
            mapping=dict(resolution.mapping),
            mapping_source=resolution.source,
        )
