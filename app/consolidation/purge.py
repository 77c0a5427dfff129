"""
app/consolidation/purge.py

Period purge: removes records whose transaction date falls in a year or month.

Purging is conservative. A record whose date cannot be parsed is kept, and a
domain with no identifiable date column is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from app.consolidation.dates import parse_date
from app.domain.sales import DomainState, Record

WHOLE_YEAR = -1

_DATE_COLUMN_HINTS: tuple[str, ...] = ("date", "on")


class InvalidPeriodError(ValueError):
    """
    Raised when a purge period is outside the supported range.
    """


@dataclass(frozen=True)
class PurgePeriod:
    """
    Year plus zero-indexed month, or ``WHOLE_YEAR`` for every month.
    """

    year: int
    month: int = WHOLE_YEAR

    def __post_init__(self) -> None:
        if not WHOLE_YEAR <= self.month <= 11:
            raise InvalidPeriodError(f"month must be between -1 and 11, got {self.month}.")
        if self.year < 1:
            raise InvalidPeriodError(f"year must be positive, got {self.year}.")

    def contains(self, value: Any) -> bool:
        """
        True only when ``value`` parses to a date inside this period.
        """

        parsed = parse_date(value)
        if parsed is None:
            return False
        if parsed.year != self.year:
            return False
        return self.month == WHOLE_YEAR or parsed.month - 1 == self.month


@dataclass(frozen=True)
class PurgeOutcome:
    kept: tuple[Record, ...]
    removed: int


def resolve_date_column(state: DomainState) -> str | None:
    """
    Prefer the mapped ``date`` column; otherwise the first raw column of the
    first record whose name contains "date" or "on" (case-insensitive).
    """

    mapped = state.mapping.get("date")
    if mapped:
        return mapped
    if not state.records:
        return None
    for column in state.records[0]:
        low = column.lower()
        if any(hint in low for hint in _DATE_COLUMN_HINTS):
            return column
    return None


def purge_records(
    records: Sequence[Mapping[str, Any]],
    date_column: str,
    period: PurgePeriod,
) -> PurgeOutcome:
    kept: list[Record] = []
    removed = 0
    for record in records:
        if period.contains(record.get(date_column)):
            removed += 1
            continue
        kept.append(dict(record))
    return PurgeOutcome(kept=tuple(kept), removed=removed)


def purge_domain(state: DomainState, period: PurgePeriod) -> tuple[DomainState, int, str | None]:
    """
    Return ``(new_state, removed_count, date_column)`` for one domain.

    The original state is returned unchanged when no date column is found.
    """

    date_column = resolve_date_column(state)
    if date_column is None:
        return state, 0, None
    outcome = purge_records(state.records, date_column, period)
    return state.with_records(outcome.kept), outcome.removed, date_column


def available_years(states: Sequence[DomainState]) -> list[int]:
    """
    Distinct years (newest first) that at least one record can be dated in.
    """

    years: set[int] = set()
    for state in states:
        date_column = resolve_date_column(state)
        if date_column is None:
            continue
        for record in state.records:
            parsed = parse_date(record.get(date_column))
            if parsed is not None:
                years.add(parsed.year)
    return sorted(years, reverse=True)
