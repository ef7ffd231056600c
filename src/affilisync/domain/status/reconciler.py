"""Reconcile an assertion's sync bookkeeping into a single status.

The state machine is not materialized: a status is recomputed from the snapshot
on every call and nothing is retained between calls.

Precedence, first match wins:

1) a denied grant overrides everything              -> USER_DENIED_ACCESS
2) a recorded error, unless the assertion was edited
   after that attempt (then PENDING_RETRY):
     404                                            -> USER_DELETED_FROM_REGISTRY
     invalid scope                                  -> USER_REVOKED_ACCESS
     never added                                    -> ERROR_ADDING
     otherwise                                      -> ERROR_UPDATING
3) no recorded error:
     revoked grant                                  -> USER_REVOKED_ACCESS
     never added                                    -> PENDING
     deleted in registry                            -> DELETED_IN_REGISTRY
     edited after the last attempt                  -> PENDING_RETRY
     otherwise                                      -> IN_REGISTRY
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC
from typing import TYPE_CHECKING, assert_never

from affilisync.domain.model import AssertionStatus, AuthorizationState, SyncErrorKind

from .authorization import resolve_authorization
from .sync_errors import classify_sync_error

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from affilisync.domain.model import AccessGrant, Assertion

    from .authorization import ResolveAuthorization
    from .sync_errors import ClassifySyncError

log = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def modified_since_last_attempt(assertion: Assertion) -> bool:
    """Whether the local copy changed after the most recent sync attempt.

    An assertion without any recorded attempt counts as modified.
    """

    if assertion.last_sync_attempt is None:
        return True
    return _as_utc(assertion.modified) > _as_utc(assertion.last_sync_attempt)


@dataclass(frozen=True, slots=True, kw_only=True)
class StatusReconciler:
    """Combine grant state, error category and timestamps into an ``AssertionStatus``."""

    resolve_authorization: ResolveAuthorization = resolve_authorization
    classify_error: ClassifySyncError = classify_sync_error

    def classify(self, assertion: Assertion, grants: Iterable[AccessGrant]) -> AssertionStatus:
        status = self._classify(assertion, grants)
        log.debug("Assertion %s classified as %s", assertion.id, status)
        return status

    def _classify(self, assertion: Assertion, grants: Iterable[AccessGrant]) -> AssertionStatus:
        authorization = self.resolve_authorization(grants, assertion.member_id)
        if authorization == AuthorizationState.DENIED:
            return AssertionStatus.USER_DENIED_ACCESS

        error_kind = self.classify_error(assertion.last_error)
        match error_kind:
            case SyncErrorKind.NONE:
                return self._synced_status(assertion, authorization)
            # a later local edit makes the recorded failure stale
            case _ if modified_since_last_attempt(assertion):
                return AssertionStatus.PENDING_RETRY
            case SyncErrorKind.NOT_FOUND:
                return AssertionStatus.USER_DELETED_FROM_REGISTRY
            case SyncErrorKind.INVALID_SCOPE:
                return AssertionStatus.USER_REVOKED_ACCESS
            case SyncErrorKind.OTHER:
                if assertion.added_at is None:
                    return AssertionStatus.ERROR_ADDING
                return AssertionStatus.ERROR_UPDATING
            case _:
                assert_never(error_kind)

    @staticmethod
    def _synced_status(
        assertion: Assertion, authorization: AuthorizationState
    ) -> AssertionStatus:
        if authorization == AuthorizationState.REVOKED:
            return AssertionStatus.USER_REVOKED_ACCESS
        if assertion.added_at is None:
            return AssertionStatus.PENDING
        if assertion.deleted_at is not None:
            return AssertionStatus.DELETED_IN_REGISTRY
        if modified_since_last_attempt(assertion):
            return AssertionStatus.PENDING_RETRY
        return AssertionStatus.IN_REGISTRY


DEFAULT_RECONCILER = StatusReconciler()


def classify_assertion_status(
    assertion: Assertion, grants: Iterable[AccessGrant]
) -> AssertionStatus:
    """Return the reconciliation status of ``assertion`` given the user's grants."""

    return DEFAULT_RECONCILER.classify(assertion, grants)
