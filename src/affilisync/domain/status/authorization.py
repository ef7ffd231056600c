"""Resolve the authorization state of a member's access grant."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from affilisync.domain.model import AuthorizationState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from affilisync.domain.model import AccessGrant


class ResolveAuthorization(Protocol):
    """Map the grants held for a user to the state of one member's grant."""

    def __call__(self, grants: Iterable[AccessGrant], member_id: str) -> AuthorizationState: ...


def find_grant(grants: Iterable[AccessGrant], member_id: str) -> AccessGrant | None:
    """Return the first grant belonging to ``member_id``."""

    return next((grant for grant in grants if grant.member_id == member_id), None)


def resolve_authorization(grants: Iterable[AccessGrant], member_id: str) -> AuthorizationState:
    """Return whether the member's grant is approved, denied or revoked.

    No matching grant means no authorization problem is known locally, which
    resolves to ``APPROVED``.
    """

    grant = find_grant(grants, member_id)
    if grant is None:
        return AuthorizationState.APPROVED
    if grant.denied_at is not None:
        return AuthorizationState.DENIED
    if grant.revoked_at is not None:
        return AuthorizationState.REVOKED
    return AuthorizationState.APPROVED
