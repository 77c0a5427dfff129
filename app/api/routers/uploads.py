"""
app/api/routers/uploads.py

File upload and remote JSON import endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from app.api.dependencies import get_sales_upload, get_services, read_upload_bytes
from app.domain.sales import UploadSummary
from app.schemas.uploads import RemoteImportRequest, UploadSummaryResponse
from app.services.container import AppServices
from app.services.domain_registry import UnknownDomainError
from app.services.file_ingestion_service import (
    EmptyUploadError,
    FileParseError,
    RemoteFetchError,
    UnsupportedFileTypeError,
)
from db.repositories.errors import DomainStatePersistenceError

router = APIRouter(prefix="/domains", tags=["ingestion"])


def _to_response(summary: UploadSummary) -> UploadSummaryResponse:
    return UploadSummaryResponse(
        domain=summary.domain,
        added=summary.added,
        duplicates=summary.duplicates,
        total_records=summary.total_records,
        mapping=summary.mapping,
        mapping_source=summary.mapping_source,
    )


_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (UnknownDomainError, status.HTTP_404_NOT_FOUND),
    (EmptyUploadError, status.HTTP_400_BAD_REQUEST),
    (UnsupportedFileTypeError, status.HTTP_400_BAD_REQUEST),
    (FileParseError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (RemoteFetchError, status.HTTP_502_BAD_GATEWAY),
    (DomainStatePersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def _http_error(exc: Exception) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Upload failed.")


_UPLOAD_ERRORS = tuple(error_type for error_type, _ in _STATUS_BY_ERROR)


@router.post("/{domain}/upload", response_model=UploadSummaryResponse)
async def upload_file(
    domain: str,
    file: UploadFile = Depends(get_sales_upload),
    services: AppServices = Depends(get_services),
) -> UploadSummaryResponse:
    """
    Merge one CSV/XLS/XLSX file into ``domain``; duplicates are skipped.
    """

    filename = file.filename
    payload = await read_upload_bytes(file)
    try:
        summary = await services.uploads.ingest_file(domain, filename=filename, payload=payload)
    except _UPLOAD_ERRORS as exc:
        raise _http_error(exc) from exc
    return _to_response(summary)


@router.post("/{domain}/import-url", response_model=UploadSummaryResponse)
async def import_url(
    domain: str,
    request: RemoteImportRequest,
    services: AppServices = Depends(get_services),
) -> UploadSummaryResponse:
    """
    Fetch a JSON array of records from ``url`` and merge it into ``domain``.
    """

    try:
        summary = await services.uploads.ingest_url(domain, url=str(request.url))
    except _UPLOAD_ERRORS as exc:
        raise _http_error(exc) from exc
    return _to_response(summary)
