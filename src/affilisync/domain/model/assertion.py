"""Affiliation assertions and their registry bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from affilisync.domain.model.entity import Entity
from affilisync.domain.model.enums import AffiliationSection, EntityType

if TYPE_CHECKING:
    from datetime import datetime

    from affilisync.domain.model.sync_error import SyncError


@dataclass(eq=False, kw_only=True)
class Assertion(Entity):
    """A member organization's claim about one user's affiliation.

    Bookkeeping fields (``last_sync_attempt``, ``last_error``, ``added_at``,
    ``updated_at``, ``deleted_at``) belong to the sync engine and change through the
    ``record_*`` helpers only, so that an attempt is always observed as one unit.
    Loading from storage bypasses the helpers; readers must tolerate stored rows
    that break the invariants.
    """

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ASSERTION

    member_id: str
    modified: datetime

    email: str | None = None
    orcid_id: str | None = None
    affiliation_section: AffiliationSection | None = None
    org_name: str | None = None
    department_name: str | None = None
    created: datetime | None = None

    last_sync_attempt: datetime | None = None
    last_error: SyncError | None = None
    added_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    external_ref: str | None = None

    @property
    def ever_added(self) -> bool:
        return self.added_at is not None

    def touch(self, at: datetime) -> None:
        """Record a local edit."""
        self.modified = at

    def record_sync_success(self, at: datetime, *, external_ref: str | None = None) -> None:
        self.last_sync_attempt = at
        self.last_error = None
        if self.added_at is None:
            self.added_at = at
        else:
            self.updated_at = at
        if external_ref is not None:
            self.external_ref = external_ref

    def record_sync_failure(self, at: datetime, error: SyncError) -> None:
        self.last_sync_attempt = at
        self.last_error = error

    def record_deletion(self, at: datetime) -> None:
        if self.added_at is None:
            raise ValueError("cannot delete an assertion that was never added to the registry")
        self.deleted_at = at
