"""
app/consolidation/dedup.py

Merges an upload batch into a domain's existing records without duplicates.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from app.consolidation.fingerprint import record_fingerprint
from app.domain.sales import MergeResult, Record


def dedupe_batch(
    existing: Sequence[Mapping[str, Any]],
    incoming: Sequence[Mapping[str, Any]],
) -> tuple[list[Record], int]:
    """
    Return ``(unique_new_records, duplicate_count)``.

    A candidate is a duplicate when its fingerprint matches an existing record
    or an earlier candidate of the same batch. Unique records keep input order.
    """

    seen: set[str] = {record_fingerprint(record) for record in existing}
    unique: list[Record] = []
    duplicates = 0

    for record in incoming:
        fingerprint = record_fingerprint(record)
        if fingerprint in seen:
            duplicates += 1
            continue
        seen.add(fingerprint)
        unique.append(dict(record))

    return unique, duplicates


def merge_records(
    existing: Sequence[Mapping[str, Any]],
    incoming: Sequence[Mapping[str, Any]],
) -> MergeResult:
    """
    Existing records followed by the unique part of ``incoming``.
    """

    unique, duplicates = dedupe_batch(existing, incoming)
    merged = tuple([dict(record) for record in existing] + unique)
    return MergeResult(records=merged, added=len(unique), duplicates=duplicates)
