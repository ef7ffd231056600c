"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from affilisync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyAssertionUnitOfWork,
    is_started,
    startup,
)
from affilisync.domain.ports.unit_of_work import AssertionUnitOfWork
from affilisync.domain.status import classify_assertion_status
from affilisync.domain.status_report import StatusReport, build_status_report

if TYPE_CHECKING:
    from uuid import UUID

    from affilisync.domain.model import AccessGrant, Assertion, AssertionStatus

UnitOfWorkFactory = Callable[[], AssertionUnitOfWork]


log = getLogger(__name__)


def _resolve_uow_factory(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyAssertionUnitOfWork


def assertion_status(
    assertion_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> AssertionStatus:
    """Classify one stored assertion against its user's grants."""

    effective_uow = _resolve_uow_factory(unit_of_work_factory)
    with effective_uow() as uow:
        assertion = uow.repositories.assertions.get(assertion_id)
        if assertion is None:
            raise LookupError(f"Unknown assertion: {assertion_id}")
        grants = uow.repositories.grants.list_for_email(assertion.email) if assertion.email else []
        status = classify_assertion_status(assertion, grants)

    log.info("Assertion %s is %s", assertion_id, status)
    return status


def member_status_report(
    member_id: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> StatusReport:
    """Build the status report for every assertion owned by ``member_id``."""

    effective_uow = _resolve_uow_factory(unit_of_work_factory)
    log.info("Building status report for member %s", member_id)

    with effective_uow() as uow:
        assertions = uow.repositories.assertions.list_for_member(member_id)
        emails = {assertion.email for assertion in assertions if assertion.email}
        grants_by_email = uow.repositories.grants.list_for_emails(emails)

        def grants_for(assertion: Assertion) -> list[AccessGrant]:
            if assertion.email is None:
                return []
            return grants_by_email.get(assertion.email, [])

        report = build_status_report(assertions, grants_for)

    log.info(
        "Finished status report for member %s: assertions=%s, users=%s",
        member_id,
        len(report),
        len(emails),
    )
    return report
