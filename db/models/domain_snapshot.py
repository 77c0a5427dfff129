"""
db/models/domain_snapshot.py

One row per sales domain holding that domain's whole dataset and mapping.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class DomainSnapshot(Base, TimestampMixin):
    __tablename__ = "domain_snapshots"

    domain_key: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Lower-cased domain name, e.g. 'myntra'",
    )
    display_name: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
        comment="Domain name as configured, e.g. 'AJIO'",
    )
    records_json: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        comment="Ordered raw records of the domain",
    )
    mapping_json: Mapped[dict[str, str | None]] = mapped_column(
        JSONB,
        nullable=False,
        default=dict,
        comment="Canonical field -> raw column mapping",
    )
    record_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
