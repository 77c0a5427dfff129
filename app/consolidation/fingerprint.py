"""
app/consolidation/fingerprint.py

Order-independent record fingerprints used for duplicate detection.
"""

from __future__ import annotations

import json
import math
from datetime import date, datetime
from typing import Any, Mapping


def record_fingerprint(record: Mapping[str, Any]) -> str:
    """
    Build a deterministic string for a record.

    Items are sorted by field name and serialized as ``[[key, value], ...]``.
    Null-valued fields stay in the payload, so a record with an extra null
    field never matches one that lacks the field.
    """

    pairs = [[key, _canonical_value(record[key])] for key in sorted(record)]
    return json.dumps(pairs, separators=(",", ":"), ensure_ascii=False, default=str)


def _canonical_value(value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
