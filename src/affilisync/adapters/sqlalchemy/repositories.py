"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from sqlalchemy import select

from affilisync.adapters.sqlalchemy.mappings import access_grant_table, assertion_table
from affilisync.domain.model import AccessGrant, Assertion

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from sqlalchemy.orm import Session


class SqlAlchemyAssertionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Assertion) -> None:
        self.session.add(entity)

    def get(self, assertion_id: UUID) -> Assertion | None:
        return self.session.get(Assertion, assertion_id)

    def list_for_member(self, member_id: str) -> list[Assertion]:
        stmt = (
            select(Assertion)
            .where(assertion_table.c.member_id == member_id)
            .order_by(assertion_table.c.email, assertion_table.c.modified)
        )
        return list(self.session.execute(stmt).scalars())

    def list_for_email(self, email: str) -> list[Assertion]:
        stmt = (
            select(Assertion)
            .where(assertion_table.c.email == email)
            .order_by(assertion_table.c.modified)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyAccessGrantRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: AccessGrant) -> None:
        self.session.add(entity)

    def list_for_email(self, email: str) -> list[AccessGrant]:
        stmt = select(AccessGrant).where(access_grant_table.c.email == email)
        return list(self.session.execute(stmt).scalars())

    def list_for_emails(self, emails: Iterable[str]) -> dict[str, list[AccessGrant]]:
        wanted = set(emails)
        grouped: dict[str, list[AccessGrant]] = defaultdict(list)
        if not wanted:
            return {}
        stmt = select(AccessGrant).where(access_grant_table.c.email.in_(wanted))
        for grant in self.session.execute(stmt).scalars():
            if grant.email is not None:
                grouped[grant.email].append(grant)
        return dict(grouped)
