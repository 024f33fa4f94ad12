"""Day status classification and calendar visibility."""

from __future__ import annotations
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from .integrity import Diagnostic, DiagnosticKind, parse_iso_date
from .logging import get_logger
from .models import DayStatus, WorkDay

logger = get_logger(__name__)

ReferenceNow = Union[date, datetime, str]


def reference_date(value: ReferenceNow) -> Optional[date]:
    """Reduce ``value`` to the calendar day whose end bounds "today"."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_iso_date(value)
    if parsed is not None:
        return parsed
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def today_iso(now: Optional[ReferenceNow] = None) -> str:
    if now is None:
        return date.today().isoformat()
    resolved = reference_date(now)
    if resolved is None:
        raise ValueError(f"Invalid reference date {now!r}")
    return resolved.isoformat()


def is_future(day: str, reference_now: ReferenceNow) -> bool:
    """True when ``day`` starts after the last instant of the reference day."""
    parsed = parse_iso_date(day)
    today = reference_date(reference_now)
    if parsed is None or today is None:
        return False
    return parsed > today


def _report(diagnostics: Optional[List[Diagnostic]], message: str, record_id: Optional[str]) -> None:
    logger.warning("malformed_date", detail=message, record_id=record_id)
    if diagnostics is not None:
        diagnostics.append(Diagnostic(DiagnosticKind.MALFORMED_DATE, message, record_id))


def classify(
    day: str,
    work_day: Optional[WorkDay],
    reference_now: ReferenceNow,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> DayStatus:
    """Classify ``day`` for one employee.

    Total over its inputs: malformed dates yield ``NOT_SCHEDULED`` and a
    diagnostic rather than an exception.
    """
    record_id = work_day.id if work_day is not None else None
    if parse_iso_date(day) is None:
        _report(diagnostics, f"Cannot classify malformed date {day!r}", record_id)
        return DayStatus.NOT_SCHEDULED
    if reference_date(reference_now) is None:
        _report(diagnostics, f"Malformed reference date {reference_now!r}", record_id)
        return DayStatus.NOT_SCHEDULED

    if work_day is None:
        return DayStatus.NOT_SCHEDULED
    if is_future(day, reference_now):
        return DayStatus.SCHEDULED
    if work_day.worked and work_day.paid:
        return DayStatus.WORKED_PAID
    if work_day.worked:
        return DayStatus.WORKED_UNPAID
    return DayStatus.NOT_WORKED


def find_work_day(work_days: Iterable[WorkDay], employee_id: str, day: str) -> Optional[WorkDay]:
    for work_day in work_days:
        if work_day.employee_id == employee_id and work_day.date == day:
            return work_day
    return None


def status_for(
    employee_id: str,
    day: str,
    work_days: Iterable[WorkDay],
    reference_now: ReferenceNow,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> DayStatus:
    return classify(day, find_work_day(work_days, employee_id, day), reference_now, diagnostics)


def is_visible(work_day: WorkDay, today: str) -> bool:
    """Calendar filter: worked days always, unworked days only from today on."""
    return work_day.worked or work_day.date >= today


def visible_work_days(work_days: Iterable[WorkDay], today: str) -> List[WorkDay]:
    return [work_day for work_day in work_days if is_visible(work_day, today)]
