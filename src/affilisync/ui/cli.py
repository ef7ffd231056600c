from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from affilisync.adapters.csv_report import write_status_report
from affilisync.app import assertion_status, member_status_report
from affilisync.config import configure_logging, get_registry_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report ORCID sync status of affiliations")
    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="Show the status of one assertion")
    status.add_argument(
        "--assertion-id",
        type=str,
        required=True,
        help="Id of the assertion to classify",
    )

    report = subparsers.add_parser("report", help="Write a member's status report as CSV")
    report.add_argument(
        "--member-id",
        type=str,
        required=True,
        help="Member (salesforce) id owning the assertions",
    )
    report.add_argument(
        "--output",
        type=Path,
        help="Destination CSV file (defaults to stdout)",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _run_report(member_id: str, output: Path | None) -> None:
    report = member_status_report(member_id)
    registry = get_registry_config()
    if output is None:
        write_status_report(report, sys.stdout, registry=registry)
    else:
        with output.open("w", newline="", encoding="utf-8") as handle:
            write_status_report(report, handle, registry=registry)
        log.info("Wrote %s rows to %s", len(report), output)
    for status, count in sorted(report.counts.items()):
        log.info("%s: %s", status.label, count)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        assertion_id = (
            _parse_uuid(parsed_args.assertion_id) if parsed_args.command == "status" else None
        )
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "status" and assertion_id is not None:
            status = assertion_status(assertion_id)
            log.info("%s (%s)", status.label, status.value)
        elif parsed_args.command == "report":
            _run_report(parsed_args.member_id, parsed_args.output)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error while reporting")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
