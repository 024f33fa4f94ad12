from __future__ import annotations
import csv
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Iterable

from .errors import ValidationError
from .models import Employee, Payment, WorkDay
from .wages import resolve_amount


WORK_DAY_HEADERS = [
    "id",
    "employee_id",
    "date",
    "worked",
    "paid",
    "custom_amount",
    "amount",
    "notes",
]

PAYMENT_HEADERS = [
    "id",
    "employee_id",
    "date",
    "amount",
    "payment_type",
    "work_day_ids",
    "notes",
]


def export_work_days(path: Path, work_days: Iterable[WorkDay], employees: Dict[str, Employee]) -> None:
    """Write work days with their resolved amount; unknown employees get a blank amount."""
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=WORK_DAY_HEADERS)
        writer.writeheader()
        for day in work_days:
            employee = employees.get(day.employee_id)
            writer.writerow(
                {
                    "id": day.id,
                    "employee_id": day.employee_id,
                    "date": day.date,
                    "worked": day.worked,
                    "paid": day.paid,
                    "custom_amount": "" if day.custom_amount is None else day.custom_amount,
                    "amount": resolve_amount(day, employee) if employee else "",
                    "notes": day.notes or "",
                }
            )


def export_payments(path: Path, payments: Iterable[Payment]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=PAYMENT_HEADERS)
        writer.writeheader()
        for payment in payments:
            writer.writerow(
                {
                    "id": payment.id,
                    "employee_id": payment.employee_id,
                    "date": payment.date,
                    "amount": payment.amount,
                    "payment_type": payment.payment_type.value,
                    "work_day_ids": ";".join(payment.work_day_ids),
                    "notes": payment.notes or "",
                }
            )


def _parse_amount(value: str | None, line: int) -> Decimal | None:
    # blank means unset; "0" is a real amount
    if value in (None, ""):
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise ValidationError(f"Row {line}: invalid custom amount {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"Row {line}: invalid custom amount {value!r}")
    return amount


def import_work_days(path: Path) -> list[WorkDay]:
    """Read every row before returning so a bad row rejects the whole file."""
    work_days: list[WorkDay] = []
    with path.open(encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        # line 1 is the header
        for line, row in enumerate(reader, start=2):
            missing = [column for column in ("id", "employee_id", "date") if not row.get(column)]
            if missing:
                raise ValidationError(f"Row {line}: missing " + ", ".join(missing))
            work_days.append(
                WorkDay(
                    id=row["id"],
                    employee_id=row["employee_id"],
                    date=row["date"],
                    worked=row.get("worked", "False") in ("True", "true", "1"),
                    paid=row.get("paid", "False") in ("True", "true", "1"),
                    custom_amount=_parse_amount(row.get("custom_amount"), line),
                    notes=row.get("notes") or None,
                )
            )
    return work_days
