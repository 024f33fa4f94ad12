from __future__ import annotations

from decimal import Decimal

from app.db.store import SqlStore
from app.models import WorkDay
from app.seed.seed_data import seed


def test_business_stats_sum_per_employee(client):
    client.post("/employees", json={"id": "e1", "name": "Ada", "daily_wage": "100"})
    client.post("/employees", json={"id": "e2", "name": "Grace", "daily_wage": "80"})
    day = client.put("/work-days", json={"employee_id": "e1", "date": "2024-01-10", "worked": True}).json()
    client.put("/work-days", json={"employee_id": "e2", "date": "2024-01-10", "worked": True})
    client.post("/payments", json={"employee_id": "e1", "work_day_ids": [day["id"]], "amount": "90"})

    body = client.get("/reports/stats").json()

    assert Decimal(body["total"]["total_earned"]) == Decimal("180")
    assert Decimal(body["total"]["total_paid"]) == Decimal("90")
    assert Decimal(body["total"]["total_owed"]) == Decimal("90")
    assert [e["employee_name"] for e in body["employees"]] == ["Ada", "Grace"]


def test_business_stats_ignore_ghost_work_days(client, db_session):
    client.post("/employees", json={"id": "e1", "name": "Ada", "daily_wage": "100"})
    client.put("/work-days", json={"employee_id": "e1", "date": "2024-01-10", "worked": True})
    db_session.add(WorkDay(id="ghost-1", employee_id="ghost", date="2024-01-10", worked=True, paid=False))
    db_session.commit()

    response = client.get("/reports/stats")

    assert response.status_code == 200
    assert Decimal(response.json()["total"]["total_earned"]) == Decimal("100")


def test_business_stats_filter_by_employee(client):
    client.post("/employees", json={"id": "e1", "name": "Ada", "daily_wage": "100"})
    client.post("/employees", json={"id": "e2", "name": "Grace", "daily_wage": "80"})
    client.put("/work-days", json={"employee_id": "e2", "date": "2024-01-10", "worked": True})

    body = client.get("/reports/stats", params={"employee_id": "e2"}).json()

    assert [e["employee_id"] for e in body["employees"]] == ["e2"]
    assert Decimal(body["total"]["total_earned"]) == Decimal("80")


def test_seed_loads_consistent_data(db_session):
    seed(db_session)

    store = SqlStore(db_session)
    assert set(store.employees) == {"ada", "grace"}
    assert len(store.payments) == 1
    [payment] = store.payments.values()
    assert all(store.work_days[day_id].paid for day_id in payment.work_day_ids)
