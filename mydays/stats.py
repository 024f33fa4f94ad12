"""Earned / paid / owed aggregation.

Totals are always computed per employee and then summed, so one employee's
wage history never leaks into another's work days.
"""

from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Union

from .logging import get_logger
from .models import CENT, ZERO, DateRange, Employee, Payment, Stats, WorkDay
from .wages import resolve_amount

logger = get_logger(__name__)


def to_currency(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def filter_work_days(
    work_days: Iterable[WorkDay],
    employee_ids: Optional[Iterable[str]] = None,
    date_range: Optional[DateRange] = None,
) -> List[WorkDay]:
    wanted = set(employee_ids) if employee_ids is not None else None
    return [
        day
        for day in work_days
        if (wanted is None or day.employee_id in wanted) and (date_range is None or date_range.contains(day.date))
    ]


def filter_payments(
    payments: Iterable[Payment],
    employee_ids: Optional[Iterable[str]] = None,
    date_range: Optional[DateRange] = None,
) -> List[Payment]:
    wanted = set(employee_ids) if employee_ids is not None else None
    return [
        payment
        for payment in payments
        if (wanted is None or payment.employee_id in wanted) and (date_range is None or date_range.contains(payment.date))
    ]


def employee_stats(
    employee: Employee,
    work_days: Iterable[WorkDay],
    payments: Iterable[Payment],
    date_range: Optional[DateRange] = None,
) -> Stats:
    days = filter_work_days(work_days, [employee.id], date_range)
    worked = [day for day in days if day.worked]
    paid_days = [day for day in days if day.paid]

    earned = to_currency(sum((resolve_amount(day, employee) for day in worked), ZERO))

    own_payments = filter_payments(payments, [employee.id])
    matching_payments = filter_payments(own_payments, date_range=date_range)
    # a day paid by a payment dated outside the range is still paid, just not here
    covered = {day_id for payment in own_payments for day_id in payment.work_day_ids}
    orphaned = [day for day in paid_days if day.id not in covered]
    paid_from_work_days = False
    if matching_payments:
        paid = sum((payment.amount for payment in matching_payments), ZERO)
    elif orphaned:
        # Legacy data: days flagged paid without any payment record.
        paid = sum((resolve_amount(day, employee) for day in orphaned), ZERO)
        paid_from_work_days = True
        logger.warning("paid_days_without_payments", employee_id=employee.id, paid_days=len(orphaned))
    else:
        paid = ZERO
    paid = to_currency(paid)

    return Stats(
        total_worked=len(worked),
        total_paid_days=len(paid_days),
        total_earned=earned,
        total_paid=paid,
        total_owed=earned - paid,
        paid_from_work_days=paid_from_work_days,
    )


def stats_by_employee(
    employees: Iterable[Employee],
    work_days: Iterable[WorkDay],
    payments: Iterable[Payment],
    date_range: Optional[DateRange] = None,
) -> Dict[str, Stats]:
    work_day_list = list(work_days)
    payment_list = list(payments)
    return {
        employee.id: employee_stats(employee, work_day_list, payment_list, date_range)
        for employee in employees
    }


def aggregate(
    employees: Union[Employee, Iterable[Employee]],
    work_days: Iterable[WorkDay],
    payments: Iterable[Payment],
    date_range: Optional[DateRange] = None,
) -> Stats:
    """Business-wide totals for ``employees`` (or a single employee).

    Work days and payments owned by unknown employees never reach the totals.
    """
    if isinstance(employees, Employee):
        employees = [employees]
    total = Stats()
    for stats in stats_by_employee(employees, work_days, payments, date_range).values():
        total = total + stats
    return total
