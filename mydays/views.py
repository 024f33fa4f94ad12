from __future__ import annotations
from calendar import monthrange
from datetime import date, timedelta
from typing import Iterable, List, Optional

from .integrity import related_payment
from .models import DateRange, DayStatus, Employee, Payment, Stats, WorkDay
from .presentation import format_money, style_for
from .stats import aggregate, employee_stats, filter_work_days
from .status import classify, find_work_day, is_future, visible_work_days
from .wages import resolve_amount


def month_range(year: int, month: int) -> DateRange:
    _, last_day = monthrange(year, month)
    return DateRange(start=date(year, month, 1).isoformat(), end=date(year, month, last_day).isoformat())


def format_employee_summary(employee: Employee, stats: Stats, currency: str = "£") -> str:
    rows = [
        f"{employee.name} ({format_money(employee.daily_wage, currency)}/day)",
        f"Days worked: {stats.total_worked}  Days paid: {stats.total_paid_days}",
        f"Earned: {format_money(stats.total_earned, currency)}  Paid: {format_money(stats.total_paid, currency)}  "
        f"Owed: {format_money(stats.total_owed, currency)}",
    ]
    if employee.has_wage_history:
        rows.append(f"Previous wage {format_money(employee.previous_wage, currency)}/day before {employee.wage_change_date}")
    if stats.paid_from_work_days:
        rows.append("Warning: paid total estimated from paid days, no payment records found")
    return "\n".join(rows)


def format_calendar(
    employee: Employee,
    work_days: Iterable[WorkDay],
    payments: Iterable[Payment],
    year: int,
    month: int,
    today: str,
    currency: str = "£",
) -> str:
    own_days = filter_work_days(work_days, [employee.id])
    shown = visible_work_days(own_days, today)
    payment_list = list(payments)
    rows = [f"Calendar {year}-{month:02d} for {employee.name}", "Date        Day  St  Status           Amount"]

    current = date(year, month, 1)
    while current.month == month:
        day = current.isoformat()
        work_day = find_work_day(shown, employee.id, day)
        status = classify(day, work_day, today)
        style = style_for(status)
        amount = format_money(resolve_amount(work_day, employee), currency) if work_day else ""
        rows.append(f"{day}  {current:%a}  {style.symbol:<2}  {style.label:<15}  {amount}")
        current += timedelta(days=1)

    stats = employee_stats(employee, own_days, payment_list, month_range(year, month))
    rows.append(
        f"Worked {stats.total_worked}  Paid days {stats.total_paid_days}  "
        f"Earned {format_money(stats.total_earned, currency)}  Paid {format_money(stats.total_paid, currency)}  "
        f"Owed {format_money(stats.total_owed, currency)}"
    )
    return "\n".join(rows)


def format_work_history(
    employees: Iterable[Employee],
    work_days: Iterable[WorkDay],
    payments: Iterable[Payment],
    today: str,
    *,
    employee_ids: Optional[List[str]] = None,
    date_range: Optional[DateRange] = None,
    paid: Optional[bool] = None,
    currency: str = "£",
) -> str:
    employee_index = {e.id: e for e in employees}
    scope = employee_ids if employee_ids is not None else list(employee_index)
    payment_list = list(payments)
    days = [d for d in filter_work_days(work_days, scope, date_range) if d.employee_id in employee_index]
    if paid is not None:
        days = [d for d in days if d.paid == paid]

    rows = ["Work history", "Date        Employee              Status           Amount      Payment"]
    for work_day in sorted(days, key=lambda d: (d.date, employee_index[d.employee_id].name.lower()), reverse=True):
        employee = employee_index[work_day.employee_id]
        status = classify(work_day.date, work_day, today)
        payment = related_payment(work_day, payment_list)
        if payment is not None:
            payment_text = f"{payment.payment_type.value} on {payment.date}"
        elif work_day.paid:
            payment_text = "no payment record found"
        else:
            payment_text = "-"
        rows.append(
            f"{work_day.date}  {employee.name:<20}  {style_for(status).label:<15}  "
            f"{format_money(resolve_amount(work_day, employee), currency):>10}  {payment_text}"
        )

    scheduled = sum(1 for d in days if is_future(d.date, today))
    totals = aggregate([employee_index[i] for i in scope if i in employee_index], days, payment_list, date_range)
    rows.append(
        f"{len(days)} entries  worked {totals.total_worked}  scheduled {scheduled}  paid days {totals.total_paid_days}  "
        f"owed {format_money(totals.total_owed, currency)}"
    )
    return "\n".join(rows)


def count_by_status(employee: Employee, work_days: Iterable[WorkDay], today: str) -> dict:
    counts = {status: 0 for status in DayStatus}
    for work_day in filter_work_days(work_days, [employee.id]):
        counts[classify(work_day.date, work_day, today)] += 1
    return counts
