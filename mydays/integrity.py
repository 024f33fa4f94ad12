"""Data-integrity checks over a snapshot.

Nothing here raises: anomalies are returned as :class:`Diagnostic` records the
caller may surface ("no payment record found", ...).
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional

from .models import Employee, Payment, WorkDay
from .wages import resolve_total

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DiagnosticKind(str, Enum):
    PAID_WITHOUT_PAYMENT = "paid_without_payment"
    INCONSISTENT_WAGE_HISTORY = "inconsistent_wage_history"
    UNKNOWN_EMPLOYEE = "unknown_employee"
    PAYMENT_AMOUNT_MISMATCH = "payment_amount_mismatch"
    MALFORMED_DATE = "malformed_date"
    NEGATIVE_AMOUNT = "negative_amount"
    INVALID_AMOUNT = "invalid_amount"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    record_id: Optional[str] = None


def parse_iso_date(value: object) -> Optional[date]:
    """Parse a fixed-width ``yyyy-MM-dd`` string, returning None when malformed."""
    if not isinstance(value, str) or not ISO_DATE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _not_finite(value: Optional[Decimal]) -> bool:
    return value is not None and not value.is_finite()


def _negative(value: Optional[Decimal]) -> bool:
    return value is not None and value.is_finite() and value < 0


def validate_employee(employee: Employee) -> List[Diagnostic]:
    problems: List[Diagnostic] = []
    if _not_finite(employee.daily_wage) or _not_finite(employee.previous_wage):
        problems.append(Diagnostic(DiagnosticKind.INVALID_AMOUNT, f"Employee {employee.name} has a non-numeric wage", employee.id))
    if _negative(employee.daily_wage) or _negative(employee.previous_wage):
        problems.append(Diagnostic(DiagnosticKind.NEGATIVE_AMOUNT, f"Employee {employee.name} has a negative wage", employee.id))
    if employee.wage_change_date is not None and parse_iso_date(employee.wage_change_date) is None:
        problems.append(
            Diagnostic(DiagnosticKind.MALFORMED_DATE, f"Invalid wage change date {employee.wage_change_date!r}", employee.id)
        )
    return problems


def validate_work_day(work_day: WorkDay) -> List[Diagnostic]:
    problems: List[Diagnostic] = []
    if parse_iso_date(work_day.date) is None:
        problems.append(Diagnostic(DiagnosticKind.MALFORMED_DATE, f"Invalid work day date {work_day.date!r}", work_day.id))
    if _not_finite(work_day.custom_amount):
        problems.append(Diagnostic(DiagnosticKind.INVALID_AMOUNT, f"Invalid custom amount {work_day.custom_amount}", work_day.id))
    if _negative(work_day.custom_amount):
        problems.append(Diagnostic(DiagnosticKind.NEGATIVE_AMOUNT, f"Negative custom amount {work_day.custom_amount}", work_day.id))
    return problems


def validate_payment(payment: Payment) -> List[Diagnostic]:
    problems: List[Diagnostic] = []
    if parse_iso_date(payment.date) is None:
        problems.append(Diagnostic(DiagnosticKind.MALFORMED_DATE, f"Invalid payment date {payment.date!r}", payment.id))
    if _not_finite(payment.amount):
        problems.append(Diagnostic(DiagnosticKind.INVALID_AMOUNT, f"Invalid payment amount {payment.amount}", payment.id))
    if _negative(payment.amount):
        problems.append(Diagnostic(DiagnosticKind.NEGATIVE_AMOUNT, f"Negative payment amount {payment.amount}", payment.id))
    return problems


def related_payment(work_day: WorkDay, payments: Iterable[Payment]) -> Optional[Payment]:
    for payment in payments:
        if payment.covers(work_day.id):
            return payment
    return None


def check_integrity(
    employees: Iterable[Employee],
    work_days: Iterable[WorkDay],
    payments: Iterable[Payment],
) -> List[Diagnostic]:
    employee_index = {employee.id: employee for employee in employees}
    work_day_list = list(work_days)
    work_day_index = {day.id: day for day in work_day_list}
    payment_list = list(payments)
    covered = {day_id for payment in payment_list for day_id in payment.work_day_ids}
    problems: List[Diagnostic] = []

    for employee in employee_index.values():
        problems.extend(validate_employee(employee))
        if (employee.wage_change_date is None) != (employee.previous_wage is None):
            problems.append(
                Diagnostic(
                    DiagnosticKind.INCONSISTENT_WAGE_HISTORY,
                    f"Employee {employee.name} has a partial wage change record; using the daily wage",
                    employee.id,
                )
            )

    for day in work_day_list:
        problems.extend(validate_work_day(day))
        if day.is_day_note:
            continue
        if day.employee_id not in employee_index:
            problems.append(
                Diagnostic(DiagnosticKind.UNKNOWN_EMPLOYEE, f"Work day {day.date} references unknown employee {day.employee_id}", day.id)
            )
        if day.paid and day.id not in covered:
            problems.append(Diagnostic(DiagnosticKind.PAID_WITHOUT_PAYMENT, f"Work day {day.date} is paid but no payment record found", day.id))

    for payment in payment_list:
        problems.extend(validate_payment(payment))
        employee = employee_index.get(payment.employee_id)
        if employee is None:
            problems.append(
                Diagnostic(DiagnosticKind.UNKNOWN_EMPLOYEE, f"Payment references unknown employee {payment.employee_id}", payment.id)
            )
            continue
        days = [work_day_index[day_id] for day_id in payment.work_day_ids if day_id in work_day_index]
        expected = resolve_total(days, employee)
        if len(days) == len(payment.work_day_ids) and expected != payment.amount:
            problems.append(
                Diagnostic(
                    DiagnosticKind.PAYMENT_AMOUNT_MISMATCH,
                    f"Payment of {payment.amount} differs from resolved amount {expected}",
                    payment.id,
                )
            )
    return problems
