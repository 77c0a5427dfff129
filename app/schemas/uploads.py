"""
app/schemas/uploads.py

Request and response schemas for file and URL imports.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, HttpUrl


class RemoteImportRequest(BaseModel):
    """
    Remote JSON source; the URL must answer with an array of objects.
    """

    url: HttpUrl


class UploadSummaryResponse(BaseModel):
    """
    API response model for one merged upload.
    """

    domain: str
    added: int = Field(..., ge=0)
    duplicates: int = Field(..., ge=0)
    total_records: int = Field(..., ge=0)
    mapping: dict[str, str | None]
    mapping_source: Literal["ai", "heuristic"]
