"""
app/mappers/value_coercion.py

Cell-level cleanup applied to uploaded records before they are merged.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Mapping

import numpy as np
import pandas as pd

from app.domain.sales import NUMERIC_CANONICAL_FIELDS, Record

_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]")
# Currency words ("Rs.", "INR") and the "/-" suffix are removed before filtering.
_CURRENCY_PREFIX = re.compile(r"^[^\W\d_]+\.?\s*")
_RUPEE_SUFFIX = re.compile(r"\s*/-\s*$")


def sanitize_numeric_value(value: Any) -> int | float | None:
    """
    Strip currency symbols and separators, then parse as a number.

    ``"₹1,299.00"`` and ``"Rs. 1,299.00"`` become ``1299``; blanks and
    unparseable text become None.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = _CURRENCY_PREFIX.sub("", str(value).strip())
        cleaned = _NON_NUMERIC_CHARS.sub("", _RUPEE_SUFFIX.sub("", text))
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None

    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def sanitize_numeric_columns(record: Mapping[str, Any], mapping: Mapping[str, str | None]) -> Record:
    """
    Return a copy of ``record`` with the mapped quantity/price/revenue/discount
    columns parsed as numbers.
    """

    cleaned = dict(record)
    for canonical_field in NUMERIC_CANONICAL_FIELDS:
        column = mapping.get(canonical_field)
        if column and column in cleaned:
            cleaned[column] = sanitize_numeric_value(cleaned[column])
    return cleaned


def to_json_safe(value: Any) -> Any:
    """
    Convert spreadsheet values (timestamps, numpy scalars, NaN) to JSON primitives.
    """

    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, np.generic):
        return to_json_safe(value.item())
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if value is pd.NaT:
        return None
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return to_json_safe(float(value))
    return str(value)


def json_safe_record(record: Mapping[str, Any]) -> Record:
    return {str(key): to_json_safe(value) for key, value in record.items()}
