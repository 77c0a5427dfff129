"""
app/consolidation/aggregator.py

Builds the unified "All Domains" view from every populated domain.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from app.domain.sales import DomainState, Record, identity_mapping
from app.mappers.canonical_mapper import CanonicalMapper


def aggregate_domains(
    collection: Mapping[str, DomainState | None],
    domain_order: Sequence[str],
    *,
    mapper: CanonicalMapper | None = None,
) -> DomainState | None:
    """
    Concatenate normalized records of each populated domain in ``domain_order``.

    Returns None when no domain has records. Domains present in the collection
    but missing from ``domain_order`` follow the configured ones.
    """

    canonical_mapper = mapper or CanonicalMapper()
    ordered = list(domain_order) + [name for name in collection if name not in domain_order]

    records: list[Record] = []
    populated = 0
    for name in ordered:
        state = collection.get(name)
        if state is None or state.is_empty:
            continue
        populated += 1
        records.extend(row.to_record() for row in canonical_mapper.normalize(state))

    if populated == 0:
        return None
    return DomainState(records=tuple(records), mapping=identity_mapping())
