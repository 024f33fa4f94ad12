from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from app.db.store import SqlStore
from mydays import payments as service


def seed(session: Session, today: date | None = None) -> None:
    """Load a small demo data set: two employees, two weeks of work, one payment."""
    today = today or date.today()
    store = SqlStore(session)

    ada = service.add_employee(store, name="Ada Lovelace", daily_wage=Decimal("100"), employee_id="ada")
    grace = service.add_employee(store, name="Grace Hopper", daily_wage=Decimal("80"), employee_id="grace")
    service.change_wage(store, grace.id, Decimal("90"), (today - timedelta(days=7)).isoformat())

    worked = []
    for offset in range(14, 0, -1):
        day = (today - timedelta(days=offset)).isoformat()
        worked.append(service.schedule_work_day(store, ada.id, day, worked=True))
        if offset % 2 == 0:
            service.schedule_work_day(store, grace.id, day, worked=True)

    for offset in range(1, 4):
        service.schedule_work_day(store, ada.id, (today + timedelta(days=offset)).isoformat())

    service.create_payment_and_mark_work_days(
        store,
        ada.id,
        [day.id for day in worked[:5]],
        notes="First week",
        payment_date=worked[4].date,
    )
    service.add_day_note(store, today.isoformat(), "Demo data loaded")
