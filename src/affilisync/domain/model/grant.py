"""Access grants issued by users to member organizations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from affilisync.domain.model.entity import Entity
from affilisync.domain.model.enums import EntityType

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class AccessGrant(Entity):
    """One authorization token tied to a member.

    A grant is either denied (the user declined before any token existed) or revoked
    (the user withdrew an issued token), never both.
    """

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ACCESS_GRANT

    member_id: str
    email: str | None = None
    credential: str | None = field(default=None, repr=False)
    denied_at: datetime | None = None
    revoked_at: datetime | None = None

    def deny(self, at: datetime) -> None:
        if self.revoked_at is not None:
            raise ValueError("grant already revoked; a revoked grant cannot be denied")
        self.denied_at = at

    def revoke(self, at: datetime) -> None:
        if self.denied_at is not None:
            raise ValueError("grant was denied; there is no token to revoke")
        self.revoked_at = at
