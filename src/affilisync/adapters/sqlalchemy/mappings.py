"""SQLAlchemy mapping metadata for assertions and access grants."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from affilisync.adapters.orcid import dump_sync_error, parse_sync_error
from affilisync.domain.model import AccessGrant, AffiliationSection, Assertion, SyncError

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class SyncErrorType(TypeDecorator[SyncError]):
    """Stores the registry error payload as the JSON text the sync engine wrote."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: SyncError | None, dialect: Dialect) -> str | None:
        _ = dialect
        return dump_sync_error(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> SyncError | None:
        _ = dialect
        return parse_sync_error(value)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

assertion_table = Table(
    "assertion",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("member_id", String, nullable=False),
    Column("email", String, nullable=True),
    Column("orcid_id", String(19), nullable=True),
    Column(
        "affiliation_section",
        Enum(
            AffiliationSection,
            native_enum=False,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=True,
    ),
    Column("org_name", String, nullable=True),
    Column("department_name", String, nullable=True),
    Column("created", UTCDateTime(), nullable=True),
    Column("modified", UTCDateTime(), nullable=False),
    Column("last_sync_attempt", UTCDateTime(), nullable=True),
    Column("last_error", SyncErrorType(), nullable=True),
    Column("added_at", UTCDateTime(), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
    Column("deleted_at", UTCDateTime(), nullable=True),
    Column("external_ref", String, nullable=True),
    Index("ix_assertion_member_id", "member_id"),
    Index("ix_assertion_email", "email"),
)

access_grant_table = Table(
    "access_grant",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("member_id", String, nullable=False),
    Column("email", String, nullable=True),
    Column("credential", String, nullable=True),
    Column("denied_at", UTCDateTime(), nullable=True),
    Column("revoked_at", UTCDateTime(), nullable=True),
    Index("ix_access_grant_email", "email"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Assertion, assertion_table)
    mapper_registry.map_imperatively(AccessGrant, access_grant_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
