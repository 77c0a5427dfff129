"""
app/domain package marker.
"""

from app.domain.sales import (
    ALL_DOMAINS,
    CANONICAL_FIELDS,
    CanonicalSalesRecord,
    DomainCollection,
    DomainPurgeResult,
    DomainState,
    MergeResult,
    PurgeSummary,
    Record,
    UploadSummary,
)

__all__ = [
    "ALL_DOMAINS",
    "CANONICAL_FIELDS",
    "CanonicalSalesRecord",
    "DomainCollection",
    "DomainPurgeResult",
    "DomainState",
    "MergeResult",
    "PurgeSummary",
    "Record",
    "UploadSummary",
]
