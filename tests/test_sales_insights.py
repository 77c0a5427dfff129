"""
tests/test_sales_insights.py

Insights and slide outline generation over an in-memory registry.
"""

from __future__ import annotations

import asyncio
import json

import pytest

from app.consolidation.purge import InvalidPeriodError
from app.domain.sales import DomainState, coerce_mapping
from app.services.domain_registry import DomainHasNoDataError, DomainRegistry
from app.services.sales_insights_service import SalesInsightsService, month_label
from app.services.slide_service import SlideDeckService, SlideGenerationUnavailableError
from llm_synthesis.adapter import MockLLMAdapter

DOMAINS = ("Myntra", "Amazon", "AJIO")


def _registry() -> DomainRegistry:
    return DomainRegistry(
        domains=DOMAINS,
        collection={
            "Myntra": DomainState(
                records=(
                    {"dt": "2024-01-05", "product": "Kurta", "amt": 1000, "town": "Pune"},
                    {"dt": "2024-02-05", "product": "Saree", "amt": 300, "town": "Delhi"},
                ),
                mapping=coerce_mapping({"date": "dt", "item": "product", "revenue": "amt", "city": "town"}),
            ),
            "Amazon": DomainState(
                records=({"Date": "2024-01-20", "Item": "Kurta", "Price": 100, "Qty": 2, "City": "Pune"},),
                mapping=coerce_mapping(
                    {"date": "Date", "item": "Item", "price": "Price", "quantity": "Qty", "city": "City"}
                ),
            ),
        },
    )


class TestSalesInsightsService:
    def test_single_domain_month(self) -> None:
        insights = SalesInsightsService(registry=_registry()).summarize("myntra", year=2024, month=0)

        assert insights is not None
        assert insights.domain == "Myntra"
        assert insights.record_count == 1
        revenue = next(card for card in insights.kpis if card["key"] == "revenue")
        assert revenue["value"] == pytest.approx(1000.0)

    def test_all_domains_uses_normalized_records(self) -> None:
        insights = SalesInsightsService(registry=_registry()).summarize("all", year=2024, month=0)

        assert insights.domain == "all"
        assert insights.record_count == 2
        assert insights.top_items == [{"name": "Kurta", "revenue": 1200.0, "orders": 2}]
        assert insights.top_cities[0]["name"] == "Pune"

    def test_without_year_covers_every_record(self) -> None:
        insights = SalesInsightsService(registry=_registry()).summarize("Myntra")

        assert insights.record_count == 2
        assert insights.month == -1

    def test_empty_domain_returns_none(self) -> None:
        assert SalesInsightsService(registry=_registry()).summarize("AJIO") is None

    def test_invalid_month(self) -> None:
        with pytest.raises(InvalidPeriodError):
            SalesInsightsService(registry=_registry()).summarize("Myntra", year=2024, month=12)

    def test_month_label(self) -> None:
        assert month_label(0) == "January"
        assert month_label(11) == "December"
        assert month_label(-1) == "Full Year"


class TestSlideDeckService:
    def test_generates_deck_from_period_data(self) -> None:
        registry = _registry()
        adapter = MockLLMAdapter()
        service = SlideDeckService(insights=SalesInsightsService(registry=registry), adapter=adapter)

        deck = asyncio.run(service.generate_slides("Myntra", month=0, year=2024))

        assert len(deck.slides) == 4
        prompt = adapter.prompts[0]
        assert '"Myntra" for January 2024' in prompt
        assert "Kurta" in prompt

    def test_bare_slide_array_is_accepted(self) -> None:
        slides = [{"slideTitle": "Only", "content": [{"type": "summary", "text": "ok"}]}]
        service = SlideDeckService(
            insights=SalesInsightsService(registry=_registry()),
            adapter=MockLLMAdapter(responses=[json.dumps(slides)]),
        )

        deck = asyncio.run(service.generate_slides("Myntra", year=2024))

        assert deck.slides[0].slide_title == "Only"

    def test_domain_without_data(self) -> None:
        service = SlideDeckService(insights=SalesInsightsService(registry=_registry()), adapter=MockLLMAdapter())

        with pytest.raises(DomainHasNoDataError):
            asyncio.run(service.generate_slides("AJIO", year=2024))

    def test_requires_adapter(self) -> None:
        service = SlideDeckService(insights=SalesInsightsService(registry=_registry()), adapter=None)

        with pytest.raises(SlideGenerationUnavailableError):
            asyncio.run(service.generate_slides("Myntra", year=2024))
