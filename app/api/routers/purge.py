"""
app/api/routers/purge.py

Period purge endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_services
from app.consolidation.purge import InvalidPeriodError
from app.schemas.purge import DomainPurgeResultResponse, PurgeRequest, PurgeSummaryResponse
from app.services.container import AppServices
from app.services.domain_registry import UnknownDomainError

router = APIRouter(tags=["purge"])


@router.post("/purge", response_model=PurgeSummaryResponse)
async def purge_period(
    request: PurgeRequest,
    services: AppServices = Depends(get_services),
) -> PurgeSummaryResponse:
    """
    Remove one month or a whole year of records from one or all domains.

    Domains whose save fails are listed in ``failed_domains`` and keep their
    records; the other domains are still purged.
    """

    try:
        summary = await services.purges.purge(request.domain, request.year, request.month)
    except UnknownDomainError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    return PurgeSummaryResponse(
        year=summary.year,
        month=summary.month,
        removed=summary.removed,
        failed_domains=summary.failed_domains,
        results=[
            DomainPurgeResultResponse(
                domain=result.domain,
                removed=result.removed,
                remaining=result.remaining,
                persisted=result.persisted,
                date_column=result.date_column,
                error=result.error,
            )
            for result in summary.results
        ],
    )
