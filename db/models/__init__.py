"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.domain_snapshot import DomainSnapshot

__all__ = [
    "DomainSnapshot",
]
