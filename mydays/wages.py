"""Per-day wage resolution.

Every amount attributed to a work day goes through :func:`resolve_amount`;
calendar, list, report and payment code must not recompute it.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Iterable

from .models import ZERO, Employee, WorkDay


def resolve_amount(work_day: WorkDay, employee: Employee) -> Decimal:
    """Return the amount owed for ``work_day``.

    A custom amount wins whenever it is set, including ``0``. Otherwise the
    previous wage applies strictly before the wage change date and the current
    daily wage from that date on. Half-recorded wage history falls back to the
    daily wage.
    """
    if work_day.custom_amount is not None:
        return work_day.custom_amount
    if employee.has_wage_history and work_day.date < employee.wage_change_date:
        return employee.previous_wage
    return employee.daily_wage


def resolve_total(work_days: Iterable[WorkDay], employee: Employee) -> Decimal:
    return sum((resolve_amount(day, employee) for day in work_days), ZERO)
