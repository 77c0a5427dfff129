"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and service access.
"""

from __future__ import annotations

from fastapi import File, HTTPException, Request, UploadFile, status

from app.config import get_upload_settings
from app.services.container import AppServices
from app.services.file_ingestion_service import SUPPORTED_EXTENSIONS, file_extension

SPREADSHEET_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def get_services(request: Request) -> AppServices:
    """
    Return the services built by the application lifespan.
    """

    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is still starting up.",
        )
    return services


def get_sales_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is CSV, XLS or XLSX by extension or MIME type.
    """

    extension = file_extension(file.filename)
    content_type = (file.content_type or "").strip().lower()

    if extension not in SUPPORTED_EXTENSIONS and content_type not in SPREADSHEET_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV, XLS and XLSX files are allowed.",
        )

    return file


async def read_upload_bytes(file: UploadFile) -> bytes:
    """
    Read the upload fully, rejecting files over UPLOAD_MAX_FILE_BYTES.
    """

    max_bytes = get_upload_settings().max_file_bytes
    try:
        payload = await file.read(max_bytes + 1)
    finally:
        await file.close()

    if len(payload) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {max_bytes} byte upload limit.",
        )
    return payload
