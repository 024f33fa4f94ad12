from datetime import date, timedelta
from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from app.db.store import SqlStore, get_store
from app.domains.reporting.schemas import StatsOut
from mydays import payments as service
from mydays.errors import NotFoundError, ValidationError
from mydays.models import DateRange, Employee
from mydays.stats import employee_stats
from mydays.status import status_for, today_iso
from mydays.views import month_range

router = APIRouter(prefix="/employees", tags=["employees"])


class EmployeeBase(BaseModel):
    name: str = Field(..., min_length=1)
    daily_wage: Decimal = Field(..., ge=0)
    email: str | None = None
    phone: str | None = None
    start_date: str | None = None
    notes: str | None = None


class EmployeeCreate(EmployeeBase):
    id: str | None = None


class EmployeeOut(EmployeeBase):
    id: str
    wage_change_date: str | None = None
    previous_wage: Decimal | None = None


class WageChange(BaseModel):
    daily_wage: Decimal = Field(..., ge=0)
    effective_date: str


class CalendarDay(BaseModel):
    date: str
    status: str
    work_day_id: str | None = None


def _out(employee: Employee) -> EmployeeOut:
    return EmployeeOut(
        id=employee.id,
        name=employee.name,
        daily_wage=employee.daily_wage,
        email=employee.email,
        phone=employee.phone,
        start_date=employee.start_date,
        notes=employee.notes,
        wage_change_date=employee.wage_change_date,
        previous_wage=employee.previous_wage,
    )


def _require(store: SqlStore, employee_id: str) -> Employee:
    employee = store.employees.get(employee_id)
    if employee is None:
        raise NotFoundError("Employee", employee_id)
    return employee


@router.get("", response_model=list[EmployeeOut])
def list_employees(store: SqlStore = Depends(get_store)):
    return [_out(employee) for employee in store.list_employees()]


@router.post("", response_model=EmployeeOut, status_code=201)
def create_employee(payload: EmployeeCreate, store: SqlStore = Depends(get_store)):
    if payload.id and payload.id in store.employees:
        raise ValidationError(f"Employee {payload.id} already exists")
    employee = service.add_employee(
        store,
        name=payload.name,
        daily_wage=payload.daily_wage,
        employee_id=payload.id,
        email=payload.email,
        phone=payload.phone,
        start_date=payload.start_date,
        notes=payload.notes,
    )
    return _out(employee)


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: str, store: SqlStore = Depends(get_store)):
    return _out(_require(store, employee_id))


@router.post("/{employee_id}/wage", response_model=EmployeeOut)
def change_wage(employee_id: str, payload: WageChange, store: SqlStore = Depends(get_store)):
    employee = service.change_wage(store, employee_id, payload.daily_wage, payload.effective_date)
    return _out(employee)


@router.delete("/{employee_id}", status_code=204)
def delete_employee(employee_id: str, store: SqlStore = Depends(get_store)):
    service.delete_employee(store, employee_id)
    return None


@router.get("/{employee_id}/stats", response_model=StatsOut)
def get_employee_stats(
    employee_id: str,
    start: str | None = None,
    end: str | None = None,
    store: SqlStore = Depends(get_store),
):
    employee = _require(store, employee_id)
    snapshot = store.snapshot()
    stats = employee_stats(employee, snapshot.work_days, snapshot.payments, DateRange(start, end))
    return StatsOut.from_stats(stats)


@router.get("/{employee_id}/calendar", response_model=list[CalendarDay])
def get_calendar(
    employee_id: str,
    year: int = Query(..., ge=1),
    month: int = Query(..., ge=1, le=12),
    today: str | None = None,
    store: SqlStore = Depends(get_store),
):
    _require(store, employee_id)
    try:
        reference = today_iso(today)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    work_days = store.find_work_days(employee_id)
    month_days = month_range(year, month)
    current = date.fromisoformat(month_days.start)
    last = date.fromisoformat(month_days.end)
    calendar: list[CalendarDay] = []
    while current <= last:
        day = current.isoformat()
        record = store.find_work_day(employee_id, day)
        calendar.append(
            CalendarDay(
                date=day,
                status=status_for(employee_id, day, work_days, reference).value,
                work_day_id=record.id if record else None,
            )
        )
        current += timedelta(days=1)
    return calendar
