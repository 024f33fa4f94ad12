from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.db.store import SqlStore, get_store
from mydays import payments as service
from mydays.models import DateRange, WorkDay
from mydays.stats import filter_work_days
from mydays.wages import resolve_amount

router = APIRouter(prefix="/work-days", tags=["work-days"])


class WorkDayIn(BaseModel):
    employee_id: str
    date: str
    worked: bool = False
    custom_amount: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None


class WorkDayOut(BaseModel):
    id: str
    employee_id: str
    date: str
    worked: bool
    paid: bool
    custom_amount: Decimal | None = None
    notes: str | None = None
    amount: Decimal | None = None


class DayNoteIn(BaseModel):
    date: str
    text: str


def _out(store: SqlStore, work_day: WorkDay) -> WorkDayOut:
    employee = store.employees.get(work_day.employee_id)
    return WorkDayOut(
        id=work_day.id,
        employee_id=work_day.employee_id,
        date=work_day.date,
        worked=work_day.worked,
        paid=work_day.paid,
        custom_amount=work_day.custom_amount,
        notes=work_day.notes,
        amount=resolve_amount(work_day, employee) if employee else None,
    )


@router.get("", response_model=list[WorkDayOut])
def list_work_days(
    employee_id: str | None = None,
    start: str | None = None,
    end: str | None = None,
    store: SqlStore = Depends(get_store),
):
    days = filter_work_days(
        store.find_work_days(),
        [employee_id] if employee_id else None,
        DateRange(start, end),
    )
    return [_out(store, day) for day in days]


@router.put("", response_model=WorkDayOut)
def upsert_work_day(payload: WorkDayIn, store: SqlStore = Depends(get_store)):
    work_day = service.schedule_work_day(
        store,
        payload.employee_id,
        payload.date,
        worked=payload.worked,
        custom_amount=payload.custom_amount,
        notes=payload.notes,
    )
    return _out(store, work_day)


@router.post("/toggle", response_model=WorkDayOut)
def toggle_worked(payload: WorkDayIn, store: SqlStore = Depends(get_store)):
    return _out(store, service.toggle_worked(store, payload.employee_id, payload.date))


@router.post("/notes", response_model=WorkDayOut, status_code=201)
def add_day_note(payload: DayNoteIn, store: SqlStore = Depends(get_store)):
    return _out(store, service.add_day_note(store, payload.date, payload.text))


@router.delete("/{work_day_id}", status_code=204)
def delete_work_day(work_day_id: str, store: SqlStore = Depends(get_store)):
    service.delete_work_day(store, work_day_id)
    return None
