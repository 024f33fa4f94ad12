from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from app.db.store import SqlStore, get_store
from app.domains.reporting.schemas import StatsOut
from mydays.models import DateRange
from mydays.stats import aggregate, stats_by_employee

router = APIRouter(prefix="/reports", tags=["reporting"])


class EmployeeStatsOut(StatsOut):
    employee_id: str
    employee_name: str


class BusinessStatsOut(BaseModel):
    total: StatsOut
    employees: list[EmployeeStatsOut]


@router.get("/stats", response_model=BusinessStatsOut)
def business_stats(
    start: str | None = None,
    end: str | None = None,
    employee_id: list[str] | None = Query(default=None),
    store: SqlStore = Depends(get_store),
):
    snapshot = store.snapshot()
    employees = [e for e in snapshot.employees if not employee_id or e.id in employee_id]
    date_range = DateRange(start, end)
    per_employee = stats_by_employee(employees, snapshot.work_days, snapshot.payments, date_range)
    total = aggregate(employees, snapshot.work_days, snapshot.payments, date_range)
    return BusinessStatsOut(
        total=StatsOut.from_stats(total),
        employees=[
            EmployeeStatsOut(employee_id=e.id, employee_name=e.name, **per_employee[e.id].as_dict())
            for e in employees
        ],
    )
