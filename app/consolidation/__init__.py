"""
app/consolidation package marker.
"""

from app.consolidation.aggregator import aggregate_domains
from app.consolidation.dates import parse_date
from app.consolidation.dedup import dedupe_batch, merge_records
from app.consolidation.fingerprint import record_fingerprint
from app.consolidation.purge import (
    WHOLE_YEAR,
    InvalidPeriodError,
    PurgePeriod,
    available_years,
    purge_domain,
    purge_records,
    resolve_date_column,
)

__all__ = [
    "WHOLE_YEAR",
    "InvalidPeriodError",
    "PurgePeriod",
    "aggregate_domains",
    "available_years",
    "dedupe_batch",
    "merge_records",
    "parse_date",
    "purge_domain",
    "purge_records",
    "record_fingerprint",
    "resolve_date_column",
]
