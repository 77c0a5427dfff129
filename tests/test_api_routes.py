"""
tests/test_api_routes.py

HTTP contract of the routers, wired to in-memory services.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.routers import domains_router, purge_router, slides_router, uploads_router
from app.services.container import build_services
from llm_synthesis.adapter import MockLLMAdapter
from tests.fakes import InMemoryStateStore

CSV_PAYLOAD = b"Order ID,Order Date,Sale Amount,City\nA1,2024-01-05,\"1,299\",Pune\nA2,2023-03-01,500,Delhi\n"


@pytest.fixture()
def store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture()
def client(store: InMemoryStateStore) -> TestClient:
    application = FastAPI()
    for router in (domains_router, uploads_router, purge_router, slides_router):
        application.include_router(router)
    application.state.services = build_services(store=store, adapter=MockLLMAdapter())
    return TestClient(application)


def _upload(client: TestClient, domain: str = "Myntra") -> dict:
    response = client.post(
        f"/domains/{domain}/upload",
        files={"file": ("orders.csv", CSV_PAYLOAD, "text/csv")},
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestDomainRoutes:
    def test_lists_configured_domains(self, client: TestClient) -> None:
        body = client.get("/domains").json()

        assert [domain["name"] for domain in body["domains"]][:2] == ["Myntra", "Amazon"]
        assert all(domain["record_count"] == 0 for domain in body["domains"])

    def test_unknown_domain_is_404(self, client: TestClient) -> None:
        assert client.get("/domains/Etsy").status_code == 404

    def test_aggregate_without_data_is_404(self, client: TestClient) -> None:
        assert client.get("/domains/all").status_code == 404

    def test_upload_then_read_back(self, client: TestClient, store: InMemoryStateStore) -> None:
        summary = _upload(client)

        assert summary["added"] == 2
        assert summary["mapping_source"] == "heuristic"
        assert summary["mapping"]["revenue"] == "Sale Amount"
        assert store.save_calls == ["Myntra"]

        body = client.get("/domains/myntra").json()
        assert body["records"][0]["Sale Amount"] == 1299

        aggregate = client.get("/domains/all").json()
        assert aggregate["record_count"] == 2
        assert aggregate["records"][0]["revenue"] == 1299

    def test_periods_and_kpis(self, client: TestClient) -> None:
        _upload(client)

        assert client.get("/domains/Myntra/periods").json()["years"] == [2024, 2023]

        kpis = client.get("/domains/Myntra/kpis", params={"year": 2024, "month": 0}).json()
        assert kpis["record_count"] == 1
        assert kpis["month_label"] == "January"
        assert kpis["top_cities"] == [{"name": "Pune", "revenue": 1299.0, "orders": 1}]

    def test_rejects_unsupported_file(self, client: TestClient) -> None:
        response = client.post(
            "/domains/Myntra/upload",
            files={"file": ("orders.json", b"[]", "application/json")},
        )

        assert response.status_code == 400

    def test_persistence_failure_is_503(self, client: TestClient, store: InMemoryStateStore) -> None:
        store.failing.add("Myntra")

        response = client.post(
            "/domains/Myntra/upload",
            files={"file": ("orders.csv", CSV_PAYLOAD, "text/csv")},
        )

        assert response.status_code == 503
        assert client.get("/domains/Myntra").status_code == 404


class TestPurgeRoute:
    def test_purge_reports_per_domain_results(self, client: TestClient) -> None:
        _upload(client)

        body = client.post("/purge", json={"domain": "all", "year": 2024, "month": -1}).json()

        assert body["removed"] == 1
        assert body["failed_domains"] == []
        assert body["results"][0]["domain"] == "Myntra"
        assert client.get("/domains/Myntra").json()["record_count"] == 1

    def test_invalid_month_is_422(self, client: TestClient) -> None:
        assert client.post("/purge", json={"domain": "Myntra", "year": 2024, "month": 12}).status_code == 422


class TestSlidesRoute:
    def test_returns_mock_deck(self, client: TestClient) -> None:
        _upload(client)

        body = client.post("/slides", json={"domain": "Myntra", "year": 2024, "month": 0}).json()

        assert len(body["slides"]) == 4
        assert body["slides"][0]["slideTitle"] == "Sales Overview"
        assert body["slides"][2]["content"][0]["chartType"] == "TopItemsChart"

    def test_no_data_is_404(self, client: TestClient) -> None:
        assert client.post("/slides", json={"domain": "Amazon", "year": 2024}).status_code == 404
