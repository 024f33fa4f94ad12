from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List

from mydays.integrity import related_payment
from mydays.models import DateRange
from mydays.stats import aggregate, filter_payments, filter_work_days, stats_by_employee
from mydays.status import classify
from mydays.storage import Snapshot
from mydays.wages import resolve_amount


@dataclass
class ReportRequest:
    report_type: str
    start_date: str | None = None
    end_date: str | None = None
    employee_ids: List[str] | None = None
    today: str | None = None

    @property
    def date_range(self) -> DateRange:
        return DateRange(start=self.start_date, end=self.end_date)

    @property
    def reference_date(self) -> str:
        return self.today or date.today().isoformat()


ReportRow = Dict[str, Any]


def _employees_in_scope(request: ReportRequest, snapshot: Snapshot):
    if not request.employee_ids:
        return list(snapshot.employees)
    return [e for e in snapshot.employees if e.id in request.employee_ids]


def summary_report(request: ReportRequest, snapshot: Snapshot) -> List[ReportRow]:
    """One row per employee plus a business total, all via the shared calculator."""
    employees = _employees_in_scope(request, snapshot)
    per_employee = stats_by_employee(employees, snapshot.work_days, snapshot.payments, request.date_range)
    rows: List[ReportRow] = []
    for employee in employees:
        stats = per_employee[employee.id]
        rows.append(
            {
                "employee_id": employee.id,
                "employee_name": employee.name,
                "days_worked": stats.total_worked,
                "days_paid": stats.total_paid_days,
                "total_earned": stats.total_earned,
                "total_paid": stats.total_paid,
                "total_outstanding": stats.total_owed,
            }
        )
    total = aggregate(employees, snapshot.work_days, snapshot.payments, request.date_range)
    rows.append(
        {
            "employee_id": "ALL",
            "employee_name": "All employees",
            "days_worked": total.total_worked,
            "days_paid": total.total_paid_days,
            "total_earned": total.total_earned,
            "total_paid": total.total_paid,
            "total_outstanding": total.total_owed,
        }
    )
    return rows


def detailed_report(request: ReportRequest, snapshot: Snapshot) -> List[ReportRow]:
    employees = {e.id: e for e in _employees_in_scope(request, snapshot)}
    days = filter_work_days(snapshot.work_days, list(employees), request.date_range)
    rows: List[ReportRow] = []
    for work_day in sorted(days, key=lambda d: (d.date, employees[d.employee_id].name.lower())):
        employee = employees[work_day.employee_id]
        payment = related_payment(work_day, snapshot.payments)
        rows.append(
            {
                "employee_name": employee.name,
                "date": work_day.date,
                "status": classify(work_day.date, work_day, request.reference_date).value,
                "worked": "Yes" if work_day.worked else "No",
                "paid": "Yes" if work_day.paid else "No",
                "amount": resolve_amount(work_day, employee),
                "payment": f"{payment.payment_type.value} {payment.date}" if payment else "",
            }
        )
    return rows


def payments_report(request: ReportRequest, snapshot: Snapshot) -> List[ReportRow]:
    employees = {e.id: e for e in _employees_in_scope(request, snapshot)}
    rows: List[ReportRow] = []
    for payment in filter_payments(snapshot.payments, list(employees), request.date_range):
        rows.append(
            {
                "employee_name": employees[payment.employee_id].name,
                "payment_date": payment.date,
                "amount": payment.amount,
                "payment_type": payment.payment_type.value,
                "work_days": len(payment.work_day_ids),
                "notes": payment.notes or "",
            }
        )
    return rows


REPORT_BUILDERS = {
    "summary": summary_report,
    "detailed": detailed_report,
    "payments": payments_report,
}


def build_report(request: ReportRequest, snapshot: Snapshot) -> List[ReportRow]:
    try:
        builder = REPORT_BUILDERS[request.report_type]
    except KeyError as exc:
        raise ValueError(f"Unknown report type: {request.report_type}") from exc
    return builder(request, snapshot)
