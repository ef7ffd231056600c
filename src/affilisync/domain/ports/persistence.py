"""Ports for persisting assertions and access grants."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from affilisync.domain.model import AccessGrant, Assertion

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class AssertionRepository(Repository[Assertion], Protocol):
    """Persistence contract for assertions."""

    def get(self, assertion_id: UUID) -> Assertion | None: ...

    def list_for_member(self, member_id: str) -> list[Assertion]: ...

    def list_for_email(self, email: str) -> list[Assertion]: ...


@runtime_checkable
class AccessGrantRepository(Repository[AccessGrant], Protocol):
    """Persistence contract for access grants, keyed by the owning user's email."""

    def list_for_email(self, email: str) -> list[AccessGrant]: ...

    def list_for_emails(self, emails: Iterable[str]) -> dict[str, list[AccessGrant]]: ...
