"""Public domain model surface."""

from __future__ import annotations

from affilisync.domain.model.assertion import Assertion
from affilisync.domain.model.entity import Entity
from affilisync.domain.model.enums import (
    AffiliationSection,
    AssertionStatus,
    AuthorizationState,
    EntityType,
    SyncErrorKind,
)
from affilisync.domain.model.grant import AccessGrant
from affilisync.domain.model.sync_error import SyncError

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    # records
    "Assertion",
    "AccessGrant",
    "SyncError",
    # enums
    "AffiliationSection",
    "AssertionStatus",
    "AuthorizationState",
    "EntityType",
    "SyncErrorKind",
]
