"""
app/schemas/domains.py

Response schemas for domain data and insight endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class DomainSummaryResponse(BaseModel):
    """
    One configured domain and how many raw records it holds.
    """

    name: str
    record_count: int = Field(..., ge=0)
    has_data: bool


class DomainListResponse(BaseModel):
    domains: list[DomainSummaryResponse] = Field(default_factory=list)
    load_source: str


class DomainDataResponse(BaseModel):
    """
    Raw records plus the column mapping that describes them.
    """

    domain: str
    records: list[dict[str, Any]] = Field(default_factory=list)
    mapping: dict[str, str | None]
    record_count: int = Field(..., ge=0)


class DomainPeriodsResponse(BaseModel):
    domain: str
    years: list[int] = Field(default_factory=list)


class KPICardResponse(BaseModel):
    key: str
    title: str
    value: float | int | None = None


class TopEntryResponse(BaseModel):
    name: str
    revenue: float
    orders: int = Field(..., ge=0)


class SalesInsightsResponse(BaseModel):
    """
    KPIs and rankings for one domain and period.
    """

    domain: str
    year: int | None = None
    month: int = Field(..., ge=-1, le=11)
    month_label: str
    record_count: int = Field(..., ge=0)
    kpis: list[KPICardResponse] = Field(default_factory=list)
    top_items: list[TopEntryResponse] = Field(default_factory=list)
    top_cities: list[TopEntryResponse] = Field(default_factory=list)
