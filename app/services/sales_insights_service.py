"""
app/services/sales_insights_service.py

KPI, top-items and top-cities summaries for one domain and period.

Records are normalized onto the canonical schema first, so the same
calculation serves single domains and the ``all`` aggregate.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from typing import Any

from app.consolidation.purge import WHOLE_YEAR, PurgePeriod
from app.mappers.canonical_mapper import normalize_domain
from app.services.domain_registry import DomainRegistry
from kpi.sales import SalesKPIFormula, filter_by_period, kpi_cards, top_by_revenue

TOP_LIMIT = 10


def month_label(month: int) -> str:
    """
    Zero-indexed month to its English name; ``WHOLE_YEAR`` reads "Full Year".
    """

    if month == WHOLE_YEAR:
        return "Full Year"
    return calendar.month_name[month + 1]


@dataclass(frozen=True)
class SalesInsights:
    """
    Computed view of one domain for one period. ``year=None`` covers all data.
    """

    domain: str
    year: int | None
    month: int
    record_count: int
    kpis: list[dict[str, Any]] = field(default_factory=list)
    top_items: list[dict[str, Any]] = field(default_factory=list)
    top_cities: list[dict[str, Any]] = field(default_factory=list)


class SalesInsightsService:
    def __init__(self, *, registry: DomainRegistry, formula: SalesKPIFormula | None = None) -> None:
        self._registry = registry
        self._formula = formula or SalesKPIFormula()

    def summarize(self, domain: str, *, year: int | None = None, month: int = WHOLE_YEAR) -> SalesInsights | None:
        """
        Return the insights for ``domain``, or None when it holds no data.

        Raises:
            UnknownDomainError: ``domain`` is not configured.
            InvalidPeriodError: ``year``/``month`` out of range.
        """

        name = self._registry.resolve(domain, allow_all=True)
        if year is not None:
            PurgePeriod(year=year, month=month)
            period_month = month
        else:
            period_month = WHOLE_YEAR

        state = self._registry.view(name)
        if state is None or state.is_empty:
            return None

        canonical = [row.to_record() for row in normalize_domain(state)]
        selected = filter_by_period(canonical, year=year, month=period_month)
        metrics = self._formula.calculate({"records": selected})
        return SalesInsights(
            domain=name,
            year=year,
            month=period_month,
            record_count=len(selected),
            kpis=kpi_cards(metrics),
            top_items=top_by_revenue(selected, "item", limit=TOP_LIMIT),
            top_cities=top_by_revenue(selected, "city", limit=TOP_LIMIT),
        )
