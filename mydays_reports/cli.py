from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from mydays.config import get_settings
from mydays.logging import configure_logging, get_logger
from mydays.storage import DataStore

from .audit import AuditLogger, ReportRun
from .exporter import export_report
from .reports import REPORT_BUILDERS, ReportRequest, build_report

logger = get_logger(__name__)


def parse_date(value: str | None) -> str | None:
    if not value:
        return None
    return datetime.fromisoformat(value).date().isoformat()


def run_report(args: argparse.Namespace) -> None:
    settings = get_settings()
    store = DataStore(Path(args.data) if args.data else settings.data_path)
    request = ReportRequest(
        report_type=args.report,
        start_date=parse_date(args.start_date),
        end_date=parse_date(args.end_date),
        employee_ids=args.employee,
        today=parse_date(args.today),
    )
    rows = build_report(request, store.snapshot())
    output_path = Path(args.output) if args.output else None
    if output_path:
        export_report(rows, output_path, title=f"{args.report.title()} report")
        print(f"Report exported to {output_path}")
    else:
        print(json.dumps(rows, default=str, indent=2))

    logger.info("report_run", report_type=args.report, rows=len(rows))
    audit_log(args).record(ReportRun.from_request(request, output_path, len(rows)))


def audit_log(args: argparse.Namespace) -> AuditLogger:
    return AuditLogger(Path(args.audit_log) if args.audit_log else get_settings().audit_log_path)


def show_audit(args: argparse.Namespace) -> None:
    runs = audit_log(args).runs(args.report)
    if args.limit:
        runs = runs[-args.limit :]
    print(json.dumps([asdict(run) for run in runs], indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="My Days reporting utility")
    parser.add_argument("--data", help="Path to the JSON data file")
    parser.add_argument("--audit-log", help="Path to the report audit log")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_cmd = subparsers.add_parser("run-report", help="Run a single report")
    run_cmd.add_argument("--report", choices=sorted(REPORT_BUILDERS), required=True)
    run_cmd.add_argument("--start-date")
    run_cmd.add_argument("--end-date")
    run_cmd.add_argument("--employee", action="append", help="Employee id (repeatable)")
    run_cmd.add_argument("--today", help="Reference date for day statuses")
    run_cmd.add_argument("--output", help="Output file (csv, pdf or html)")
    run_cmd.set_defaults(func=run_report)

    audit_cmd = subparsers.add_parser("audit", help="Show audit log")
    audit_cmd.add_argument("--report", choices=sorted(REPORT_BUILDERS), help="Only runs of this report type")
    audit_cmd.add_argument("--limit", type=int, help="Show only the most recent runs")
    audit_cmd.set_defaults(func=show_audit)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(get_settings().log_level)
    args.func(args)


if __name__ == "__main__":
    main()
