"""
app/schemas/purge.py

Request and response schemas for period purges.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PurgeRequest(BaseModel):
    """
    ``month`` is zero-indexed; -1 purges the whole year.
    """

    domain: str = Field(..., min_length=1)
    year: int = Field(..., ge=1)
    month: int = Field(default=-1, ge=-1, le=11)


class DomainPurgeResultResponse(BaseModel):
    domain: str
    removed: int = Field(..., ge=0)
    remaining: int = Field(..., ge=0)
    persisted: bool
    date_column: str | None = None
    error: str | None = None


class PurgeSummaryResponse(BaseModel):
    """
    Per-domain outcomes. ``failed_domains`` lists saves that were rejected.
    """

    year: int
    month: int
    removed: int = Field(..., ge=0)
    failed_domains: list[str] = Field(default_factory=list)
    results: list[DomainPurgeResultResponse] = Field(default_factory=list)
