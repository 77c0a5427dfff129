"""
tests/test_purge_service.py

Multi-domain purge: per-domain isolation and commit only after a confirmed save.
"""

from __future__ import annotations

import asyncio

import pytest

from app.consolidation.purge import InvalidPeriodError
from app.domain.sales import DomainState, coerce_mapping
from app.services.domain_registry import DomainRegistry
from app.services.purge_service import PurgeService
from tests.fakes import InMemoryStateStore

DOMAINS = ("Myntra", "Amazon", "Flipkart", "AJIO")


def _registry() -> DomainRegistry:
    return DomainRegistry(
        domains=DOMAINS,
        collection={
            "Myntra": DomainState(
                records=({"Order Date": "2023-01-15"}, {"Order Date": "2023-02-01"}, {"Order Date": "bad"}),
                mapping=coerce_mapping({"date": "Order Date"}),
            ),
            "Amazon": DomainState(records=({"purchase_date": "15/01/2023"}, {"purchase_date": "2022-01-15"})),
            "Flipkart": DomainState(records=({"sku": "A"},)),
        },
    )


class TestPurgeService:
    def test_single_domain_month(self) -> None:
        registry = _registry()
        store = InMemoryStateStore()

        summary = asyncio.run(PurgeService(registry=registry, store=store).purge("myntra", 2023, 0))

        assert summary.removed == 1
        assert [result.domain for result in summary.results] == ["Myntra"]
        assert [r["Order Date"] for r in registry.get("Myntra").records] == ["2023-02-01", "bad"]
        assert store.save_calls == ["Myntra"]

    def test_all_domains_whole_year(self) -> None:
        registry = _registry()
        store = InMemoryStateStore()

        summary = asyncio.run(PurgeService(registry=registry, store=store).purge("all", 2023))

        by_domain = {result.domain: result for result in summary.results}
        assert set(by_domain) == {"Myntra", "Amazon", "Flipkart"}
        assert by_domain["Myntra"].removed == 2
        assert by_domain["Amazon"].removed == 1
        assert by_domain["Amazon"].date_column == "purchase_date"
        assert by_domain["Flipkart"].date_column is None
        assert by_domain["Flipkart"].remaining == 1
        assert summary.removed == 3
        assert sorted(store.save_calls) == ["Amazon", "Myntra"]

    def test_failed_save_is_isolated_and_not_committed(self) -> None:
        registry = _registry()
        before = registry.get("Amazon")
        store = InMemoryStateStore(failing={"Amazon"})

        summary = asyncio.run(PurgeService(registry=registry, store=store).purge("all", 2023))

        assert summary.failed_domains == ["Amazon"]
        amazon = next(result for result in summary.results if result.domain == "Amazon")
        assert amazon.persisted is False
        assert amazon.removed == 0
        assert "Amazon" in (amazon.error or "")
        assert registry.get("Amazon") is before
        assert len(registry.get("Myntra").records) == 1
        assert summary.removed == 2

    def test_nothing_to_remove_skips_save(self) -> None:
        registry = _registry()
        store = InMemoryStateStore()

        summary = asyncio.run(PurgeService(registry=registry, store=store).purge("Myntra", 2019))

        assert summary.removed == 0
        assert summary.results[0].persisted is True
        assert store.save_calls == []

    def test_invalid_month_is_rejected(self) -> None:
        service = PurgeService(registry=_registry(), store=InMemoryStateStore())

        with pytest.raises(InvalidPeriodError):
            asyncio.run(service.purge("Myntra", 2023, 12))

    def test_available_years(self) -> None:
        service = PurgeService(registry=_registry(), store=InMemoryStateStore())

        assert service.available_years("all") == [2023, 2022]
        assert service.available_years("Flipkart") == []
