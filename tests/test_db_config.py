"""
tests/test_db_config.py

Database URL resolution from the environment.
"""

from __future__ import annotations

import pytest

from db.config import normalize_postgres_url, resolve_database_url


@pytest.fixture(autouse=True)
def _clear_urls(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_DB_URL", raising=False)


class TestResolveDatabaseUrl:
    def test_database_url_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql://app@db/sales")
        monkeypatch.setenv("SUPABASE_DB_URL", "postgres://hosted/sales")

        assert resolve_database_url() == "postgresql+psycopg://app@db/sales"

    def test_hosted_url_is_the_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPABASE_DB_URL", "postgres://hosted/sales")

        assert resolve_database_url() == "postgresql+psycopg://hosted/sales"

    def test_blank_values_count_as_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "   ")

        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            resolve_database_url()


def test_driver_qualified_urls_are_untouched() -> None:
    assert normalize_postgres_url("postgresql+psycopg://x/y") == "postgresql+psycopg://x/y"
