"""create domain_snapshots table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "domain_snapshots",
        sa.Column("domain_key", sa.String(length=64), nullable=False, comment="Lower-cased domain name, e.g. 'myntra'"),
        sa.Column("display_name", sa.String(length=120), nullable=False, comment="Domain name as configured, e.g. 'AJIO'"),
        sa.Column(
            "records_json",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            comment="Ordered raw records of the domain",
        ),
        sa.Column(
            "mapping_json",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            comment="Canonical field -> raw column mapping",
        ),
        sa.Column("record_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("domain_key", name="pk_domain_snapshots"),
    )


def downgrade() -> None:
    op.drop_table("domain_snapshots")
