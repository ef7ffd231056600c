"""Assertion status reconciliation.

``classify_assertion_status`` is the entry point; the resolver and the error
classifier are exposed for callers that need the intermediate signals.
"""

from __future__ import annotations

from .authorization import ResolveAuthorization, find_grant, resolve_authorization
from .reconciler import (
    DEFAULT_RECONCILER,
    StatusReconciler,
    classify_assertion_status,
    modified_since_last_attempt,
)
from .sync_errors import (
    INVALID_SCOPE_MARKER,
    NOT_FOUND_CODE,
    ClassifySyncError,
    classify_sync_error,
)

__all__ = [
    "DEFAULT_RECONCILER",
    "INVALID_SCOPE_MARKER",
    "NOT_FOUND_CODE",
    "ClassifySyncError",
    "ResolveAuthorization",
    "StatusReconciler",
    "classify_assertion_status",
    "classify_sync_error",
    "find_grant",
    "modified_since_last_attempt",
]
