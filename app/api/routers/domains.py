"""
app/api/routers/domains.py

Domain data, period and KPI endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_services
from app.consolidation.purge import InvalidPeriodError
from app.schemas.domains import (
    DomainDataResponse,
    DomainListResponse,
    DomainPeriodsResponse,
    DomainSummaryResponse,
    KPICardResponse,
    SalesInsightsResponse,
    TopEntryResponse,
)
from app.services.container import AppServices
from app.services.domain_registry import UnknownDomainError
from app.services.sales_insights_service import month_label

router = APIRouter(prefix="/domains", tags=["domains"])


@router.get("", response_model=DomainListResponse)
def list_domains(services: AppServices = Depends(get_services)) -> DomainListResponse:
    """
    List configured domains with their record counts.
    """

    registry = services.registry
    summaries: list[DomainSummaryResponse] = []
    for name in registry.domains:
        state = registry.get(name)
        count = len(state.records) if state is not None else 0
        summaries.append(DomainSummaryResponse(name=name, record_count=count, has_data=count > 0))
    return DomainListResponse(domains=summaries, load_source=services.load_source)


@router.get("/{domain}", response_model=DomainDataResponse)
def get_domain(domain: str, services: AppServices = Depends(get_services)) -> DomainDataResponse:
    """
    Return a domain's raw records, or the normalized aggregate for ``all``.
    """

    try:
        name = services.registry.resolve(domain, allow_all=True)
        state = services.registry.view(name)
    except UnknownDomainError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    if state is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No data available for {name}.",
        )
    return DomainDataResponse(
        domain=name,
        records=[dict(record) for record in state.records],
        mapping=dict(state.mapping),
        record_count=len(state.records),
    )


@router.get("/{domain}/periods", response_model=DomainPeriodsResponse)
def get_domain_periods(domain: str, services: AppServices = Depends(get_services)) -> DomainPeriodsResponse:
    """
    Years (newest first) that hold at least one datable record.
    """

    try:
        name = services.registry.resolve(domain, allow_all=True)
        years = services.purges.available_years(name)
    except UnknownDomainError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return DomainPeriodsResponse(domain=name, years=years)


@router.get("/{domain}/kpis", response_model=SalesInsightsResponse)
def get_domain_kpis(
    domain: str,
    year: int | None = Query(default=None, ge=1, description="Calendar year; omit for all data"),
    month: int = Query(default=-1, ge=-1, le=11, description="Zero-indexed month, -1 for the whole year"),
    services: AppServices = Depends(get_services),
) -> SalesInsightsResponse:
    """
    KPIs, top items and top cities for one domain and period.
    """

    try:
        insights = services.insights.summarize(domain, year=year, month=month)
    except UnknownDomainError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    if insights is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No data available for {domain}.",
        )
    return SalesInsightsResponse(
        domain=insights.domain,
        year=insights.year,
        month=insights.month,
        month_label=month_label(insights.month),
        record_count=insights.record_count,
        kpis=[KPICardResponse(**card) for card in insights.kpis],
        top_items=[TopEntryResponse(**entry) for entry in insights.top_items],
        top_cities=[TopEntryResponse(**entry) for entry in insights.top_cities],
    )
