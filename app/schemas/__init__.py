"""
app/schemas package marker.
"""

from app.schemas.domains import (
    DomainDataResponse,
    DomainListResponse,
    DomainPeriodsResponse,
    DomainSummaryResponse,
    KPICardResponse,
    SalesInsightsResponse,
    TopEntryResponse,
)
from app.schemas.purge import DomainPurgeResultResponse, PurgeRequest, PurgeSummaryResponse
from app.schemas.slides import SlideRequest
from app.schemas.uploads import RemoteImportRequest, UploadSummaryResponse

__all__ = [
    "DomainDataResponse",
    "DomainListResponse",
    "DomainPeriodsResponse",
    "DomainSummaryResponse",
    "KPICardResponse",
    "SalesInsightsResponse",
    "TopEntryResponse",
    "DomainPurgeResultResponse",
    "PurgeRequest",
    "PurgeSummaryResponse",
    "SlideRequest",
    "RemoteImportRequest",
    "UploadSummaryResponse",
]
