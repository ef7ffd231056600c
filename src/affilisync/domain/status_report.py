"""Per-member status reports built on top of the reconciler."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from affilisync.domain.status import DEFAULT_RECONCILER

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from affilisync.domain.model import AccessGrant, Assertion, AssertionStatus
    from affilisync.domain.status import StatusReconciler

type GrantsFor = Callable[[Assertion], Sequence[AccessGrant]]


@dataclass(frozen=True, slots=True)
class StatusReportRow:
    assertion: Assertion
    status: AssertionStatus


@dataclass(slots=True)
class StatusReport:
    rows: list[StatusReportRow] = field(default_factory=list["StatusReportRow"])

    @property
    def counts(self) -> Counter[AssertionStatus]:
        return Counter(row.status for row in self.rows)

    def rows_with_status(self, status: AssertionStatus) -> list[StatusReportRow]:
        return [row for row in self.rows if row.status == status]

    def __len__(self) -> int:
        return len(self.rows)


def build_status_report(
    assertions: Iterable[Assertion],
    grants_for: GrantsFor,
    *,
    reconciler: StatusReconciler | None = None,
) -> StatusReport:
    """Classify every assertion, keeping input order."""

    effective = reconciler or DEFAULT_RECONCILER
    report = StatusReport()
    for assertion in assertions:
        status = effective.classify(assertion, grants_for(assertion))
        report.rows.append(StatusReportRow(assertion=assertion, status=status))
    return report
