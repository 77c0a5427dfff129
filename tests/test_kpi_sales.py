"""
tests/test_kpi_sales.py

Pytest unit tests for the sales KPI formulas.

All tests are pure Python: canonical records in, metrics out.
"""

from __future__ import annotations

import pytest

from app.domain.sales import CANONICAL_FIELDS
from kpi.sales import SalesKPIFormula, filter_by_period, kpi_cards, top_by_revenue


def _record(**values: object) -> dict[str, object]:
    record: dict[str, object] = {name: None for name in CANONICAL_FIELDS}
    record.update(values)
    return record


RECORDS = [
    _record(orderId="A1", date="2024-01-05", item="Kurta", city="Pune", revenue=1000, quantity=2, customer="c1"),
    _record(orderId="A1", date="2024-01-05", item="Dupatta", city="Pune", revenue="200", quantity="1", customer="c1"),
    _record(orderId="A2", date="2024-02-10", item="Kurta", city="Delhi", revenue=500, quantity=1, customer="c2",
            orderStatus="Cancelled"),
    _record(orderId="A3", date="2023-12-31", item="Saree", city="Delhi", revenue=None, quantity=1, customer="c3",
            returnDate="2024-01-10"),
]


@pytest.fixture()
def formula() -> SalesKPIFormula:
    return SalesKPIFormula()


class TestSalesKPIFormula:
    def test_totals(self, formula: SalesKPIFormula) -> None:
        metrics = formula.calculate({"records": RECORDS})

        assert metrics["revenue"] == pytest.approx(1700.0)
        assert metrics["orders"] == 3
        assert metrics["units"] == pytest.approx(5.0)
        assert metrics["aov"] == pytest.approx(1700.0 / 3)
        assert metrics["unique_customers"] == 3

    def test_cancellations_and_returns(self, formula: SalesKPIFormula) -> None:
        metrics = formula.calculate({"records": RECORDS})

        assert metrics["cancelled_orders"] == 1
        assert metrics["returned_orders"] == 1
        assert metrics["cancellation_rate"] == pytest.approx(0.25)
        assert metrics["return_rate"] == pytest.approx(0.25)

    def test_orders_fall_back_to_record_count(self, formula: SalesKPIFormula) -> None:
        metrics = formula.calculate({"records": [_record(revenue=10), _record(revenue=20)]})

        assert metrics["orders"] == 2
        assert metrics["aov"] == pytest.approx(15.0)

    def test_empty_input_returns_none_for_ratios(self, formula: SalesKPIFormula) -> None:
        metrics = formula.calculate({"records": []})

        assert metrics["revenue"] == 0.0
        assert metrics["aov"] is None
        assert metrics["cancellation_rate"] is None

    def test_kpi_cards_are_ordered_and_titled(self, formula: SalesKPIFormula) -> None:
        cards = kpi_cards(formula.calculate({"records": RECORDS}))

        assert cards[0] == {"key": "revenue", "title": "Total Revenue", "value": pytest.approx(1700.0)}
        assert [card["key"] for card in cards][-1] == "return_rate"


class TestFilterByPeriod:
    def test_year_none_keeps_everything(self) -> None:
        assert filter_by_period(RECORDS, year=None) == RECORDS

    def test_whole_year(self) -> None:
        assert [r["orderId"] for r in filter_by_period(RECORDS, year=2024)] == ["A1", "A1", "A2"]

    def test_single_month_is_zero_indexed(self) -> None:
        assert [r["orderId"] for r in filter_by_period(RECORDS, year=2024, month=1)] == ["A2"]


class TestTopByRevenue:
    def test_ranks_items_by_summed_revenue(self) -> None:
        ranking = top_by_revenue(RECORDS, "item", limit=2)

        assert ranking == [
            {"name": "Kurta", "revenue": 1500.0, "orders": 2},
            {"name": "Dupatta", "revenue": 200.0, "orders": 1},
        ]

    def test_ignores_blank_keys(self) -> None:
        records = [_record(city="  ", revenue=10), _record(city=None, revenue=5), _record(city="Pune", revenue=1)]

        assert top_by_revenue(records, "city") == [{"name": "Pune", "revenue": 1.0, "orders": 1}]

    def test_empty_input(self) -> None:
        assert top_by_revenue([], "city") == []
