"""History of report runs, one JSON object per line."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .reports import ReportRequest


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ReportRun:
    report_type: str
    output: str
    row_count: int
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    employee_ids: Optional[List[str]] = None
    timestamp: str = field(default_factory=_now)

    @classmethod
    def from_request(cls, request: ReportRequest, output: Optional[Path], row_count: int) -> "ReportRun":
        return cls(
            report_type=request.report_type,
            output=str(output) if output else "stdout",
            row_count=row_count,
            start_date=request.start_date,
            end_date=request.end_date,
            employee_ids=list(request.employee_ids) if request.employee_ids else None,
        )


class AuditLogger:
    def __init__(self, path: Path):
        self.path = path

    def record(self, run: ReportRun) -> ReportRun:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(run)) + "\n")
        return run

    def runs(self, report_type: Optional[str] = None) -> List[ReportRun]:
        """Oldest first, optionally narrowed to one report type."""
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as handle:
            runs = [ReportRun(**json.loads(line)) for line in handle if line.strip()]
        if report_type:
            runs = [run for run in runs if run.report_type == report_type]
        return runs
