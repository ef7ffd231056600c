from __future__ import annotations

import dataclasses
from datetime import datetime
from itertools import product
from typing import TYPE_CHECKING

import pytest

from affilisync.domain.model import (
    AccessGrant,
    Assertion,
    AssertionStatus,
    AuthorizationState,
    SyncError,
    SyncErrorKind,
)
from affilisync.domain.status import StatusReconciler, classify_assertion_status
from tests.helpers.assertions import (
    OTHER_MEMBER_ID,
    added,
    approved_grant,
    deleted_in_registry,
    denied_grant,
    failed_after_update,
    first_sync_failed,
    make_assertion,
    make_error,
    not_added,
    revoked_grant,
    updated_in_registry,
    updated_since_adding,
    updated_since_updating,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


@pytest.mark.parametrize(
    ("build", "grant", "expected"),
    [
        (not_added, denied_grant, AssertionStatus.USER_DENIED_ACCESS),
        (not_added, approved_grant, AssertionStatus.PENDING),
        (
            lambda: failed_after_update(make_error(404)),
            approved_grant,
            AssertionStatus.USER_DELETED_FROM_REGISTRY,
        ),
        (
            lambda: failed_after_update(make_error(400, "error: invalid_scope")),
            revoked_grant,
            AssertionStatus.USER_REVOKED_ACCESS,
        ),
        (first_sync_failed, approved_grant, AssertionStatus.ERROR_ADDING),
        (
            lambda: failed_after_update(make_error(600)),
            approved_grant,
            AssertionStatus.ERROR_UPDATING,
        ),
        (
            lambda: failed_after_update(make_error(500), modified=55),
            approved_grant,
            AssertionStatus.PENDING_RETRY,
        ),
        (deleted_in_registry, approved_grant, AssertionStatus.DELETED_IN_REGISTRY),
        (added, approved_grant, AssertionStatus.IN_REGISTRY),
        (updated_in_registry, approved_grant, AssertionStatus.IN_REGISTRY),
        (updated_since_adding, approved_grant, AssertionStatus.PENDING_RETRY),
        (updated_since_updating, approved_grant, AssertionStatus.PENDING_RETRY),
    ],
)
def test_lifecycle_scenarios(
    build: Callable[[], Assertion],
    grant: Callable[[], AccessGrant],
    expected: AssertionStatus,
) -> None:
    assert classify_assertion_status(build(), [grant()]) is expected


def test_revoked_grant_without_recorded_error_reports_revocation() -> None:
    for build in (not_added, added, deleted_in_registry, updated_since_adding):
        assert classify_assertion_status(build(), [revoked_grant()]) is (
            AssertionStatus.USER_REVOKED_ACCESS
        )


def test_revoked_grant_with_generic_error_reports_the_error() -> None:
    assertion = failed_after_update(make_error(500))

    assert classify_assertion_status(assertion, [revoked_grant()]) is (
        AssertionStatus.ERROR_UPDATING
    )


def test_invalid_scope_error_reports_revocation_even_with_approved_grant() -> None:
    assertion = failed_after_update(make_error(401, "invalid_scope: token lacks /activities"))

    assert classify_assertion_status(assertion, [approved_grant()]) is (
        AssertionStatus.USER_REVOKED_ACCESS
    )


def test_not_found_takes_precedence_over_scope_marker() -> None:
    assertion = failed_after_update(make_error(404, "error: invalid_scope"))

    assert classify_assertion_status(assertion, [approved_grant()]) is (
        AssertionStatus.USER_DELETED_FROM_REGISTRY
    )


def test_edit_at_exactly_the_attempt_time_is_not_stale() -> None:
    assertion = failed_after_update(make_error(500), modified=50)

    assert classify_assertion_status(assertion, [approved_grant()]) is (
        AssertionStatus.ERROR_UPDATING
    )


def test_grants_of_other_members_are_ignored() -> None:
    grants = [denied_grant(OTHER_MEMBER_ID), revoked_grant(OTHER_MEMBER_ID)]

    assert classify_assertion_status(added(), grants) is AssertionStatus.IN_REGISTRY


def test_missing_grant_counts_as_approved() -> None:
    assert classify_assertion_status(not_added(), []) is AssertionStatus.PENDING
    assert classify_assertion_status(added(), ()) is AssertionStatus.IN_REGISTRY


def test_grants_may_be_any_iterable() -> None:
    grants = (grant for grant in [denied_grant()])

    assert classify_assertion_status(added(), grants) is AssertionStatus.USER_DENIED_ACCESS


def test_missing_attempt_timestamp_counts_as_modified() -> None:
    # stored rows can break the "error implies attempt" rule
    assertion = make_assertion(last_error=make_error(500))
    assert classify_assertion_status(assertion, []) is AssertionStatus.PENDING_RETRY

    assertion = make_assertion(added_at=10)
    assert classify_assertion_status(assertion, []) is AssertionStatus.PENDING_RETRY


def test_naive_timestamps_are_compared_as_utc() -> None:
    assertion = make_assertion(added_at=10, last_sync_attempt=10)
    assertion.modified = datetime(2024, 3, 1, 12, 0, 20)  # noqa: DTZ001

    assert classify_assertion_status(assertion, []) is AssertionStatus.PENDING_RETRY

    assertion.modified = datetime(2024, 3, 1, 12, 0, 5)  # noqa: DTZ001
    assert classify_assertion_status(assertion, []) is AssertionStatus.IN_REGISTRY


def test_aware_timestamps_in_other_zones_are_normalised() -> None:
    assertion = make_assertion(added_at=10, last_sync_attempt=10)
    assertion.modified = datetime.fromisoformat("2024-03-01T13:00:20+01:00")

    assert classify_assertion_status(assertion, []) is AssertionStatus.PENDING_RETRY


def test_malformed_error_payload_degrades_to_generic_error() -> None:
    garbled = SyncError(raw="<html>502 Bad Gateway</html>")

    assertion = make_assertion(last_sync_attempt=0, last_error=garbled)
    assert classify_assertion_status(assertion, []) is AssertionStatus.ERROR_ADDING

    assertion = failed_after_update(garbled)
    assert classify_assertion_status(assertion, []) is AssertionStatus.ERROR_UPDATING


# Properties --------------------------------------------------------------------

_TIMES: tuple[int | None, ...] = (None, 10, 50)
_ERRORS: tuple[SyncError | None, ...] = (
    None,
    make_error(404),
    make_error(400, "error: invalid_scope"),
    make_error(500),
    SyncError(raw="garbage"),
)
_GRANTS: tuple[tuple[AccessGrant, ...], ...] = (
    (),
    (approved_grant(),),
    (denied_grant(),),
    (revoked_grant(),),
    (approved_grant(OTHER_MEMBER_ID), revoked_grant()),
)


def _snapshots() -> Iterable[tuple[Assertion, tuple[AccessGrant, ...]]]:
    for modified, attempt, error, added_at, deleted_at, grants in product(
        (0, 30, 60), _TIMES, _ERRORS, _TIMES, _TIMES, _GRANTS
    ):
        assertion = make_assertion(
            modified=modified,
            last_sync_attempt=attempt,
            last_error=error,
            added_at=added_at,
            deleted_at=deleted_at,
        )
        yield assertion, grants


def test_classification_is_total_and_deterministic() -> None:
    for assertion, grants in _snapshots():
        first = classify_assertion_status(assertion, grants)
        second = classify_assertion_status(assertion, grants)

        assert first in AssertionStatus
        assert first is second


def test_classification_does_not_mutate_inputs() -> None:
    for assertion, grants in _snapshots():
        before = dataclasses.asdict(assertion)
        grants_before = [dataclasses.asdict(grant) for grant in grants]

        classify_assertion_status(assertion, grants)

        assert dataclasses.asdict(assertion) == before
        assert [dataclasses.asdict(grant) for grant in grants] == grants_before


def test_denied_grant_dominates_everything() -> None:
    for assertion, grants in _snapshots():
        if any(grant.denied_at is not None for grant in grants):
            assert classify_assertion_status(assertion, grants) is (
                AssertionStatus.USER_DENIED_ACCESS
            )


def test_stale_error_always_pends_retry() -> None:
    for assertion, grants in _snapshots():
        if assertion.last_error is None or assertion.last_sync_attempt is None:
            continue
        if any(grant.denied_at is not None for grant in grants):
            continue
        if assertion.modified > assertion.last_sync_attempt:
            assert classify_assertion_status(assertion, grants) is AssertionStatus.PENDING_RETRY


# Injected collaborators -------------------------------------------------------


def test_reconciler_uses_injected_collaborators() -> None:
    observed: dict[str, object] = {}

    class _Resolver:
        def __call__(self, grants: Iterable[AccessGrant], member_id: str) -> AuthorizationState:
            observed["member_id"] = member_id
            return AuthorizationState.REVOKED

    class _Classifier:
        def __call__(self, error: SyncError | None) -> SyncErrorKind:
            observed["error"] = error
            return SyncErrorKind.NONE

    reconciler = StatusReconciler(resolve_authorization=_Resolver(), classify_error=_Classifier())
    assertion = added()

    assert reconciler.classify(assertion, []) is AssertionStatus.USER_REVOKED_ACCESS
    assert observed == {"member_id": assertion.member_id, "error": None}


def test_denied_authorization_skips_error_classification() -> None:
    calls: list[SyncError | None] = []

    def _classify(error: SyncError | None) -> SyncErrorKind:
        calls.append(error)
        return SyncErrorKind.OTHER

    reconciler = StatusReconciler(
        resolve_authorization=lambda _grants, _member_id: AuthorizationState.DENIED,
        classify_error=_classify,
    )

    assert reconciler.classify(first_sync_failed(), []) is AssertionStatus.USER_DENIED_ACCESS
    assert calls == []


def test_default_reconciler_is_shareable() -> None:
    reconciler = StatusReconciler()

    with pytest.raises(dataclasses.FrozenInstanceError):
        reconciler.classify_error = lambda _error: SyncErrorKind.OTHER  # type: ignore[misc]


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (SyncErrorKind.NONE, AssertionStatus.IN_REGISTRY),
        (SyncErrorKind.NOT_FOUND, AssertionStatus.USER_DELETED_FROM_REGISTRY),
        (SyncErrorKind.INVALID_SCOPE, AssertionStatus.USER_REVOKED_ACCESS),
        (SyncErrorKind.OTHER, AssertionStatus.ERROR_UPDATING),
    ],
)
def test_every_error_kind_maps_to_a_status(
    kind: SyncErrorKind, expected: AssertionStatus
) -> None:
    reconciler = StatusReconciler(classify_error=lambda _error: kind)
    fresh = make_assertion(added_at=10, last_sync_attempt=10, last_error=make_error(500))
    stale = make_assertion(
        modified=20, added_at=10, last_sync_attempt=10, last_error=make_error(500)
    )

    assert reconciler.classify(fresh, [approved_grant()]) is expected
    assert reconciler.classify(stale, [approved_grant()]) is AssertionStatus.PENDING_RETRY
