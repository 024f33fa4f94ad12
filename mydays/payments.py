"""Mutations over a :class:`DataStore`: work days, payments, employees.

Each function validates its input, applies the change, saves once and returns
the updated record. Amounts always come from :mod:`mydays.wages`.
"""

from __future__ import annotations
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import uuid4

from .config import get_settings
from .errors import NotFoundError, PaymentConflictError, ValidationError
from .integrity import parse_iso_date, validate_employee, validate_payment, validate_work_day
from .logging import get_logger
from .models import (
    DAY_NOTE_EMPLOYEE_ID,
    ZERO,
    Employee,
    Payment,
    PaymentType,
    UnmarkMode,
    UnmarkResult,
    WorkDay,
)
from .storage import DataStore
from .wages import resolve_total

logger = get_logger(__name__)


def _require_employee(store: DataStore, employee_id: str) -> Employee:
    employee = store.employees.get(employee_id)
    if employee is None:
        raise NotFoundError("Employee", employee_id)
    return employee


def _require_work_day(store: DataStore, work_day_id: str) -> WorkDay:
    work_day = store.work_days.get(work_day_id)
    if work_day is None:
        raise NotFoundError("Work day", work_day_id)
    return work_day


def _require_valid(problems: list, what: str) -> None:
    if problems:
        raise ValidationError(f"Invalid {what}: " + "; ".join(p.message for p in problems), problems)


def _payments_covering(store: DataStore, work_day_ids: Iterable[str]) -> List[Payment]:
    wanted = set(work_day_ids)
    return [p for p in store.find_payments() if wanted.intersection(p.work_day_ids)]


def add_employee(
    store: DataStore,
    *,
    name: str,
    daily_wage: Decimal,
    employee_id: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    start_date: Optional[str] = None,
    notes: Optional[str] = None,
) -> Employee:
    employee = Employee(
        id=employee_id or str(uuid4()),
        name=name.strip(),
        daily_wage=daily_wage,
        email=email,
        phone=phone,
        start_date=start_date or date.today().isoformat(),
        notes=notes,
    )
    _require_valid(validate_employee(employee), "employee")
    store.add_employee(employee)
    store.save()
    logger.info("employee_added", employee_id=employee.id, daily_wage=str(daily_wage))
    return employee


def change_wage(store: DataStore, employee_id: str, new_wage: Decimal, effective_date: str) -> Employee:
    """Move the current wage to ``previous_wage`` and apply ``new_wage`` from ``effective_date``."""
    employee = _require_employee(store, employee_id)
    if parse_iso_date(effective_date) is None:
        raise ValidationError(f"Invalid wage change date {effective_date!r}")
    if not new_wage.is_finite():
        raise ValidationError(f"Invalid wage {new_wage}")
    if new_wage < 0:
        raise ValidationError(f"Negative wage {new_wage}")

    old_wage = employee.daily_wage
    employee.previous_wage = old_wage
    employee.wage_change_date = effective_date
    employee.daily_wage = new_wage
    symbol = get_settings().currency_symbol
    note = f"Wage changed from {symbol}{old_wage}/day to {symbol}{new_wage}/day on {effective_date}"
    employee.notes = f"{employee.notes}\n{note}" if employee.notes else note
    store.save()
    logger.info("wage_changed", employee_id=employee_id, old_wage=str(old_wage), new_wage=str(new_wage), effective_date=effective_date)
    return employee


def delete_employee(store: DataStore, employee_id: str) -> None:
    _require_employee(store, employee_id)
    del store.employees[employee_id]
    removed_days = [day_id for day_id, day in store.work_days.items() if day.employee_id == employee_id]
    for day_id in removed_days:
        del store.work_days[day_id]
    removed_payments = [pid for pid, payment in store.payments.items() if payment.employee_id == employee_id]
    for payment_id in removed_payments:
        del store.payments[payment_id]
    store.save()
    logger.info("employee_deleted", employee_id=employee_id, work_days=len(removed_days), payments=len(removed_payments))


def add_or_update_work_day(store: DataStore, work_day: WorkDay) -> WorkDay:
    _require_valid(validate_work_day(work_day), "work day")
    store.add_or_update_work_day(work_day)
    store.save()
    logger.info("work_day_saved", work_day_id=work_day.id, date=work_day.date, worked=work_day.worked, paid=work_day.paid)
    return work_day


def save_work_days(store: DataStore, work_days: Iterable[WorkDay]) -> List[WorkDay]:
    """Validate every record first, then store them all with a single save."""
    work_days = list(work_days)
    problems = [problem for work_day in work_days for problem in validate_work_day(work_day)]
    _require_valid(problems, "work days")
    for work_day in work_days:
        store.add_or_update_work_day(work_day)
    store.save()
    logger.info("work_days_imported", count=len(work_days))
    return work_days


def schedule_work_day(
    store: DataStore,
    employee_id: str,
    day: str,
    *,
    worked: bool = False,
    custom_amount: Optional[Decimal] = None,
    notes: Optional[str] = None,
) -> WorkDay:
    """Create or update the (employee, day) record, keeping its paid flag."""
    _require_employee(store, employee_id)
    existing = store.find_work_day(employee_id, day)
    work_day = WorkDay(
        id=existing.id if existing else WorkDay.default_id(employee_id, day),
        employee_id=employee_id,
        date=day,
        worked=worked,
        paid=existing.paid if existing else False,
        custom_amount=custom_amount,
        notes=notes.strip() if notes and notes.strip() else None,
    )
    return add_or_update_work_day(store, work_day)


def toggle_worked(store: DataStore, employee_id: str, day: str) -> WorkDay:
    _require_employee(store, employee_id)
    existing = store.find_work_day(employee_id, day)
    if existing is None:
        work_day = WorkDay(id=WorkDay.default_id(employee_id, day), employee_id=employee_id, date=day, worked=True)
    else:
        work_day = WorkDay(**{**existing.__dict__, "worked": not existing.worked})
    return add_or_update_work_day(store, work_day)


def add_day_note(store: DataStore, day: str, text: str) -> WorkDay:
    if not text.strip():
        raise ValidationError("Day note is empty")
    note = WorkDay(id=f"day-note-{day}", employee_id=DAY_NOTE_EMPLOYEE_ID, date=day, notes=text.strip())
    return add_or_update_work_day(store, note)


def delete_work_day(store: DataStore, work_day_id: str) -> None:
    _require_work_day(store, work_day_id)
    if _payments_covering(store, [work_day_id]):
        _adjust_payments(store, [work_day_id])
    del store.work_days[work_day_id]
    store.save()
    logger.info("work_day_deleted", work_day_id=work_day_id)


def create_payment_and_mark_work_days(
    store: DataStore,
    employee_id: str,
    work_day_ids: List[str],
    amount: Optional[Decimal] = None,
    payment_type: PaymentType = PaymentType.BANK_TRANSFER,
    notes: Optional[str] = None,
    payment_date: Optional[str] = None,
) -> Payment:
    """Record a payment and flag its work days paid in a single save."""
    employee = _require_employee(store, employee_id)
    if not work_day_ids:
        raise ValidationError("A payment must cover at least one work day")

    work_day_ids = list(dict.fromkeys(work_day_ids))
    days = [_require_work_day(store, day_id) for day_id in work_day_ids]
    foreign = [d.id for d in days if d.employee_id != employee_id]
    if foreign:
        raise PaymentConflictError(f"Work days {', '.join(foreign)} do not belong to employee {employee_id}")
    already_paid = [d.id for d in days if d.paid]
    if already_paid:
        raise PaymentConflictError(f"Work days {', '.join(already_paid)} are already paid")

    payment = Payment(
        id=str(uuid4()),
        employee_id=employee_id,
        work_day_ids=work_day_ids,
        amount=resolve_total(days, employee) if amount is None else amount,
        payment_type=payment_type,
        date=payment_date or date.today().isoformat(),
        created_at=datetime.now(timezone.utc).isoformat(),
        notes=notes.strip() if notes and notes.strip() else None,
    )
    _require_valid(validate_payment(payment), "payment")

    store.add_payment(payment)
    for day in days:
        day.paid = True
    store.save()
    logger.info(
        "payment_created",
        payment_id=payment.id,
        employee_id=employee_id,
        amount=str(payment.amount),
        work_days=len(payment.work_day_ids),
    )
    return payment


def unmark_work_days_as_paid(store: DataStore, work_day_ids: List[str]) -> UnmarkResult:
    """Unmark days, or ask for confirmation when payment records cover them."""
    days = [_require_work_day(store, day_id) for day_id in work_day_ids]
    covering = _payments_covering(store, work_day_ids)
    if covering:
        described = ", ".join(f"{p.date} ({p.amount})" for p in covering)
        message = (
            f"{len(covering)} payment record(s) cover these work days: {described}. "
            "Unmarking will delete or adjust them."
        )
        return UnmarkResult(
            requires_confirmation=True,
            confirmation_message=message,
            affected_payment_ids=[p.id for p in covering],
        )

    for day in days:
        day.paid = False
    store.save()
    logger.info("work_days_unmarked", work_days=len(days))
    return UnmarkResult(requires_confirmation=False, unmarked_work_day_ids=[d.id for d in days])


def _adjust_payments(store: DataStore, work_day_ids: List[str]) -> List[str]:
    removed = set(work_day_ids)
    touched: List[str] = []
    for payment in _payments_covering(store, work_day_ids):
        employee = store.employees.get(payment.employee_id)
        dropped = [store.work_days[d] for d in payment.work_day_ids if d in removed and d in store.work_days]
        payment.work_day_ids = [d for d in payment.work_day_ids if d not in removed]
        if employee is not None:
            payment.amount = max(payment.amount - resolve_total(dropped, employee), ZERO)
        if not payment.work_day_ids:
            del store.payments[payment.id]
        touched.append(payment.id)
    return touched


def force_unmark_work_days_as_paid(store: DataStore, work_day_ids: List[str], mode: UnmarkMode) -> UnmarkResult:
    """Unmark days even when payments cover them.

    ``DELETE`` removes every covering payment and unmarks all the days it
    covered. ``ADJUST`` shrinks each covering payment by the unmarked days.
    """
    for day_id in work_day_ids:
        _require_work_day(store, day_id)

    unmark_ids = list(dict.fromkeys(work_day_ids))
    if mode is UnmarkMode.DELETE:
        covering = _payments_covering(store, work_day_ids)
        for payment in covering:
            unmark_ids.extend(d for d in payment.work_day_ids if d not in unmark_ids)
            del store.payments[payment.id]
        affected = [p.id for p in covering]
    else:
        affected = _adjust_payments(store, unmark_ids)

    unmarked: List[str] = []
    for day_id in unmark_ids:
        day = store.work_days.get(day_id)
        if day is not None:
            day.paid = False
            unmarked.append(day_id)
    store.save()
    logger.info("work_days_force_unmarked", mode=mode.value, payments=len(affected), work_days=len(unmarked))
    return UnmarkResult(requires_confirmation=False, affected_payment_ids=affected, unmarked_work_day_ids=unmarked)


def delete_payment(store: DataStore, payment_id: str) -> Payment:
    payment = store.payments.get(payment_id)
    if payment is None:
        raise NotFoundError("Payment", payment_id)
    del store.payments[payment_id]
    for day_id in payment.work_day_ids:
        day = store.work_days.get(day_id)
        if day is not None:
            day.paid = False
    store.save()
    logger.info("payment_deleted", payment_id=payment_id, amount=str(payment.amount))
    return payment


def unpaid_work_days(store: DataStore, employee_id: str, today: Optional[str] = None) -> List[WorkDay]:
    """Worked, unpaid days up to ``today``: the default selection for a new payment."""
    today = today or date.today().isoformat()
    return [d for d in store.find_work_days(employee_id) if d.worked and not d.paid and d.date <= today]


def payment_preview(store: DataStore, employee_id: str, work_day_ids: List[str]) -> Decimal:
    employee = _require_employee(store, employee_id)
    return resolve_total((_require_work_day(store, d) for d in work_day_ids), employee)
