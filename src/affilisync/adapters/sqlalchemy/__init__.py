"""SQLAlchemy adapter package."""

from __future__ import annotations

from .mappings import (
    access_grant_table,
    assertion_table,
    create_all_tables,
    mapper_registry,
    start_mappers,
)
from .repositories import SqlAlchemyAccessGrantRepository, SqlAlchemyAssertionRepository

__all__ = [
    "SqlAlchemyAccessGrantRepository",
    "SqlAlchemyAssertionRepository",
    "access_grant_table",
    "assertion_table",
    "create_all_tables",
    "mapper_registry",
    "start_mappers",
]
