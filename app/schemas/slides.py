"""
app/schemas/slides.py

Request schema for slide outline generation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SlideRequest(BaseModel):
    domain: str = Field(..., min_length=1)
    year: int = Field(..., ge=1)
    month: int = Field(default=-1, ge=-1, le=11)
