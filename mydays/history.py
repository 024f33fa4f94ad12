from __future__ import annotations
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from .models import Employee, Payment, WorkDay
from .presentation import format_money

WAGE_CHANGE_NOTE = re.compile(r"Wage changed from [^\d\s]*([\d.]+)/day to [^\d\s]*([\d.]+)/day on (\d{4}-\d{2}-\d{2})")


@dataclass
class Activity:
    id: str
    kind: str  # employee_created, wage_changed, work_day_added, payment_created
    timestamp: str
    employee_id: str
    employee_name: str
    description: str
    details: Dict[str, Any] = field(default_factory=dict)


def build_activity_log(
    employees: Iterable[Employee],
    work_days: Iterable[WorkDay],
    payments: Iterable[Payment],
    currency: str = "£",
) -> List[Activity]:
    """Derive a newest-first activity feed from the stored records."""
    employee_index = {e.id: e for e in employees}
    work_day_list = list(work_days)
    work_day_ids = {d.id for d in work_day_list}
    activities: List[Activity] = []

    for employee in employee_index.values():
        if employee.start_date:
            activities.append(
                Activity(
                    id=f"emp-created-{employee.id}",
                    kind="employee_created",
                    timestamp=employee.start_date,
                    employee_id=employee.id,
                    employee_name=employee.name,
                    description=f'Employee "{employee.name}" was added',
                    details={"daily_wage": employee.daily_wage},
                )
            )
        for index, match in enumerate(WAGE_CHANGE_NOTE.finditer(employee.notes or "")):
            old_wage, new_wage, effective = Decimal(match.group(1)), Decimal(match.group(2)), match.group(3)
            activities.append(
                Activity(
                    id=f"wage-change-{employee.id}-{index}",
                    kind="wage_changed",
                    timestamp=effective,
                    employee_id=employee.id,
                    employee_name=employee.name,
                    description=(
                        f"Wage changed from {format_money(old_wage, currency)}/day "
                        f"to {format_money(new_wage, currency)}/day"
                    ),
                    details={"old_wage": old_wage, "new_wage": new_wage},
                )
            )

    for work_day in work_day_list:
        if not work_day.worked or work_day.is_day_note:
            continue
        employee = employee_index.get(work_day.employee_id)
        activities.append(
            Activity(
                id=f"work-{work_day.id}",
                kind="work_day_added",
                timestamp=f"{work_day.date}T12:00:00",
                employee_id=work_day.employee_id,
                employee_name=employee.name if employee else "Unknown Employee",
                description=f"Work day recorded for {work_day.date}",
                details={"date": work_day.date, "paid": work_day.paid},
            )
        )

    for payment in payments:
        employee = employee_index.get(payment.employee_id)
        count = sum(1 for day_id in payment.work_day_ids if day_id in work_day_ids)
        activities.append(
            Activity(
                id=f"payment-{payment.id}",
                kind="payment_created",
                timestamp=payment.created_at,
                employee_id=payment.employee_id,
                employee_name=employee.name if employee else "Unknown Employee",
                description=(
                    f"Payment of {format_money(payment.amount, currency)} processed for "
                    f"{count} work day{'' if count == 1 else 's'}"
                ),
                details={"amount": payment.amount, "payment_type": payment.payment_type.value, "date": payment.date},
            )
        )

    activities.sort(key=lambda activity: activity.timestamp, reverse=True)
    return activities
