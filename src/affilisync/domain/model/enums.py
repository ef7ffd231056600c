"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class EntityType(StrEnum):
    """Typed-reference discriminator for persisted domain entities."""

    ASSERTION = "assertion"
    ACCESS_GRANT = "access_grant"


class AffiliationSection(StrEnum):
    EMPLOYMENT = "employment"
    EDUCATION = "education"
    QUALIFICATION = "qualification"
    INVITED_POSITION = "invited-position"
    DISTINCTION = "distinction"
    MEMBERSHIP = "membership"
    SERVICE = "service"


class AuthorizationState(StrEnum):
    """State of the member's access grant on the user's registry record."""

    APPROVED = "approved"
    DENIED = "denied"
    REVOKED = "revoked"


class SyncErrorKind(StrEnum):
    """Failure category of the last registry write attempt."""

    NONE = "none"
    NOT_FOUND = "not_found"
    INVALID_SCOPE = "invalid_scope"
    OTHER = "other"


class AssertionStatus(StrEnum):
    """Reconciliation status of an assertion against the registry.

    Closed set: consumers matching on it should end with ``assert_never`` so a new
    member cannot slip through unhandled.
    """

    USER_DENIED_ACCESS = "user_denied_access"
    USER_REVOKED_ACCESS = "user_revoked_access"
    PENDING = "pending"
    PENDING_RETRY = "pending_retry"
    ERROR_ADDING = "error_adding"
    ERROR_UPDATING = "error_updating"
    DELETED_IN_REGISTRY = "deleted_in_registry"
    USER_DELETED_FROM_REGISTRY = "user_deleted_from_registry"
    IN_REGISTRY = "in_registry"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS: Final[dict[AssertionStatus, str]] = {
    AssertionStatus.USER_DENIED_ACCESS: "User denied access",
    AssertionStatus.USER_REVOKED_ACCESS: "User revoked access",
    AssertionStatus.PENDING: "Pending",
    AssertionStatus.PENDING_RETRY: "Pending retry in ORCID",
    AssertionStatus.ERROR_ADDING: "Error adding to ORCID",
    AssertionStatus.ERROR_UPDATING: "Error updating in ORCID",
    AssertionStatus.DELETED_IN_REGISTRY: "Deleted in ORCID",
    AssertionStatus.USER_DELETED_FROM_REGISTRY: "User deleted from ORCID",
    AssertionStatus.IN_REGISTRY: "In ORCID",
}
