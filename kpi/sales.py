"""
kpi/sales.py

Sales KPI formulas over canonical records.

Expected inputs
---------------
records : list[dict]
    Canonical sales records (the 20 canonical keys, values possibly None).

Formulas
--------
Revenue            = sum(revenue)
Orders             = distinct orderId, or the record count when no orderId is mapped
Units              = sum(quantity)
AOV                = revenue / orders
Unique Customers   = distinct customer
Cancellation Rate  = cancelled records / records
Return Rate        = returned records / records

Division-by-zero cases return None for the affected metric.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import pandas as pd

from app.consolidation.dates import parse_date
from app.consolidation.purge import WHOLE_YEAR
from app.domain.sales import CANONICAL_FIELDS
from app.mappers.canonical_mapper import to_number
from kpi.base import BaseKPIFormula

_SENTINEL = None  # value stored when a metric cannot be computed

KPI_TITLES: dict[str, str] = {
    "revenue": "Total Revenue",
    "orders": "Total Orders",
    "units": "Units Sold",
    "aov": "Average Order Value",
    "unique_customers": "Unique Customers",
    "cancelled_orders": "Cancelled Orders",
    "returned_orders": "Returned Orders",
    "cancellation_rate": "Cancellation Rate",
    "return_rate": "Return Rate",
}


class SalesKPIFormula(BaseKPIFormula):
    """
    Deterministic sales KPI calculations with safe division-by-zero handling.
    """

    def calculate(self, inputs: dict[str, Any]) -> dict[str, float | int | None]:
        records: list[Mapping[str, Any]] = inputs["records"]

        revenue = _sum_numeric(record.get("revenue") for record in records)
        orders = _order_count(records)
        units = _sum_numeric(record.get("quantity") for record in records)
        cancelled = sum(1 for record in records if _is_cancelled(record))
        returned = sum(1 for record in records if _is_returned(record))

        return {
            "revenue": revenue,
            "orders": orders,
            "units": units,
            "aov": _safe_divide(revenue, orders),
            "unique_customers": _distinct_count(record.get("customer") for record in records),
            "cancelled_orders": cancelled,
            "returned_orders": returned,
            "cancellation_rate": _safe_divide(cancelled, len(records)),
            "return_rate": _safe_divide(returned, len(records)),
        }


def kpi_cards(metrics: Mapping[str, Any]) -> list[dict[str, Any]]:
    """
    Flatten a metrics dict into ordered ``{"key", "title", "value"}`` entries.
    """

    return [
        {"key": key, "title": title, "value": metrics.get(key)}
        for key, title in KPI_TITLES.items()
    ]


def filter_by_period(
    records: Iterable[Mapping[str, Any]],
    *,
    year: int | None,
    month: int = WHOLE_YEAR,
) -> list[Mapping[str, Any]]:
    """
    Keep canonical records whose ``date`` falls in the period; ``year=None`` keeps all.
    """

    if year is None:
        return list(records)

    selected: list[Mapping[str, Any]] = []
    for record in records:
        parsed = parse_date(record.get("date"))
        if parsed is None or parsed.year != year:
            continue
        if month != WHOLE_YEAR and parsed.month - 1 != month:
            continue
        selected.append(record)
    return selected


def top_by_revenue(
    records: list[Mapping[str, Any]],
    field: str,
    *,
    limit: int = 10,
) -> list[dict[str, Any]]:
    """
    Rank distinct values of ``field`` by summed revenue, then by record count.
    """

    if not records:
        return []

    frame = pd.DataFrame.from_records(records, columns=list(CANONICAL_FIELDS))
    keys = frame[field].where(frame[field].notna(), "").astype(str).str.strip()
    frame = frame.assign(_key=keys, _revenue=pd.to_numeric(frame["revenue"], errors="coerce"))
    frame = frame[frame["_key"] != ""]
    if frame.empty:
        return []

    grouped = (
        frame.groupby("_key")
        .agg(revenue=("_revenue", "sum"), orders=("_revenue", "size"))
        .sort_values(["revenue", "orders"], ascending=[False, False])
        .head(limit)
    )
    return [
        {"name": name, "revenue": float(row["revenue"]), "orders": int(row["orders"])}
        for name, row in grouped.iterrows()
    ]


# ---------------------------------------------------------------------------
# Pure formula functions
# ---------------------------------------------------------------------------


def _sum_numeric(values: Iterable[Any]) -> float:
    total = 0.0
    for value in values:
        number = to_number(value)
        if number is not None:
            total += number
    return total


def _distinct_count(values: Iterable[Any]) -> int:
    return len({str(value).strip() for value in values if value is not None and str(value).strip()})


def _order_count(records: list[Mapping[str, Any]]) -> int:
    order_ids = _distinct_count(record.get("orderId") for record in records)
    return order_ids if order_ids else len(records)


def _status(record: Mapping[str, Any]) -> str:
    status = record.get("orderStatus")
    return str(status).lower() if status is not None else ""


def _is_cancelled(record: Mapping[str, Any]) -> bool:
    return "cancel" in _status(record) or record.get("cancelledDate") is not None


def _is_returned(record: Mapping[str, Any]) -> bool:
    return "return" in _status(record) or record.get("returnDate") is not None


def _safe_divide(numerator: float, denominator: float) -> float | None:
    if denominator == 0:
        return _SENTINEL
    return numerator / denominator
