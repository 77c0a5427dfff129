"""
app/consolidation/dates.py

Best-effort parsing of heterogeneous date values found in marketplace exports.
"""

from __future__ import annotations

import math
import re
import warnings
from datetime import date, datetime
from typing import Any

import pandas as pd

_DAY_FIRST_PATTERN = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})$")

# Bare numbers ("5", "2023", "20240305") are not treated as dates.
_NUMERIC_TEXT = re.compile(r"^[+-]?\d+(\.\d+)?$")


def parse_date(value: Any) -> date | None:
    """
    Convert a value into a calendar date, or return None when it cannot be dated.

    Order: native date values pass through, then generic string parsing, then a
    strict ``DD-MM-YYYY`` / ``DD/MM/YY`` pattern (two-digit years + 2000).
    Ambiguous slash and dash dates read month-first. Never raises.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, float) and math.isnan(value):
        return None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or _NUMERIC_TEXT.match(text):
        return None

    parsed = _parse_generic(text)
    if parsed is not None:
        return parsed
    return _parse_day_first(text)


def _parse_generic(text: str) -> date | None:
    iso = _parse_iso(text)
    if iso is not None:
        return iso

    with warnings.catch_warnings():
        # pandas warns when it falls back to dateutil or swaps day and month.
        warnings.simplefilter("ignore", UserWarning)
        try:
            parsed = pd.to_datetime(text, errors="coerce")
        except (ValueError, OverflowError):
            return None
    if pd.isna(parsed):
        return None
    return parsed.date()


def _parse_iso(text: str) -> date | None:
    normalized = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(normalized).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _parse_day_first(text: str) -> date | None:
    match = _DAY_FIRST_PATTERN.match(text)
    if match is None:
        return None

    day = int(match.group(1))
    month = int(match.group(2))
    year = int(match.group(3))
    if year < 100:
        year += 2000
    try:
        return date(year, month, day)
    except ValueError:
        return None
