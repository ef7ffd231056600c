"""CSV export of assertion status reports."""

from __future__ import annotations

import csv
from datetime import UTC
from typing import TYPE_CHECKING, Final

from affilisync.config import RegistryConfig

if TYPE_CHECKING:
    from datetime import datetime
    from typing import TextIO

    from affilisync.domain.status_report import StatusReport, StatusReportRow

REPORT_COLUMNS: Final[tuple[str, ...]] = (
    "email",
    "orcid_id",
    "orcid_url",
    "affiliation_section",
    "org_name",
    "department_name",
    "status",
    "status_label",
    "added_at",
    "updated_at",
    "deleted_at",
    "last_sync_attempt",
    "last_error_code",
    "last_error_message",
)


def _format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


def _cell(value: object | None) -> str:
    return "" if value is None else str(value)


def _row_values(row: StatusReportRow, registry: RegistryConfig) -> dict[str, str]:
    assertion = row.assertion
    error = assertion.last_error
    return {
        "email": _cell(assertion.email),
        "orcid_id": _cell(assertion.orcid_id),
        "orcid_url": _cell(registry.profile_url(assertion.orcid_id)),
        "affiliation_section": _cell(assertion.affiliation_section),
        "org_name": _cell(assertion.org_name),
        "department_name": _cell(assertion.department_name),
        "status": row.status.value,
        "status_label": row.status.label,
        "added_at": _format_timestamp(assertion.added_at),
        "updated_at": _format_timestamp(assertion.updated_at),
        "deleted_at": _format_timestamp(assertion.deleted_at),
        "last_sync_attempt": _format_timestamp(assertion.last_sync_attempt),
        "last_error_code": _cell(error.code if error else None),
        "last_error_message": _cell(error.message if error else None),
    }


def write_status_report(
    report: StatusReport,
    stream: TextIO,
    *,
    registry: RegistryConfig | None = None,
) -> int:
    """Write ``report`` as CSV to ``stream`` and return the number of data rows."""

    effective_registry = registry or RegistryConfig()
    writer = csv.DictWriter(stream, fieldnames=REPORT_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for row in report.rows:
        writer.writerow(_row_values(row, effective_registry))
    return len(report.rows)
