from decimal import Decimal

import pytest

from mydays import payments as service
from mydays.config import Settings
from mydays.errors import NotFoundError, PaymentConflictError, ValidationError
from mydays.models import PaymentType, UnmarkMode, WorkDay
from mydays.storage import DataStore


@pytest.fixture
def store(tmp_path):
    store = DataStore(tmp_path / "store.json")
    service.add_employee(store, name="Ada", daily_wage=Decimal("100"), employee_id="e1", start_date="2024-01-01")
    for day in ("2024-01-08", "2024-01-09", "2024-01-10"):
        service.schedule_work_day(store, "e1", day, worked=True)
    return store


def ids(*days):
    return [f"e1-{day}" for day in days]


def test_payment_defaults_to_resolved_total_and_marks_days(store):
    payment = service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08", "2024-01-09"), payment_date="2024-01-11")

    assert payment.amount == Decimal("200")
    assert payment.payment_type is PaymentType.BANK_TRANSFER
    assert store.work_days["e1-2024-01-08"].paid
    assert not store.work_days["e1-2024-01-10"].paid
    # persisted in the same save
    assert DataStore(store.path).payments[payment.id].work_day_ids == ids("2024-01-08", "2024-01-09")


def test_payment_amount_may_differ_from_resolved_total(store):
    payment = service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08"), amount=Decimal("90"))

    assert payment.amount == Decimal("90")


def test_duplicate_ids_are_counted_once(store):
    payment = service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08", "2024-01-08"))

    assert payment.work_day_ids == ids("2024-01-08")
    assert payment.amount == Decimal("100")


def test_paying_a_paid_day_conflicts(store):
    service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08"))

    with pytest.raises(PaymentConflictError):
        service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08"))


def test_paying_another_employees_day_conflicts(store):
    service.add_employee(store, name="Bob", daily_wage=Decimal("50"), employee_id="e2")

    with pytest.raises(PaymentConflictError):
        service.create_payment_and_mark_work_days(store, "e2", ids("2024-01-08"))


def test_payment_rejects_negative_amount_and_empty_selection(store):
    with pytest.raises(ValidationError):
        service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08"), amount=Decimal("-1"))
    with pytest.raises(ValidationError):
        service.create_payment_and_mark_work_days(store, "e1", [])
    assert store.payments == {}
    assert not store.work_days["e1-2024-01-08"].paid


def test_unknown_records_raise_not_found(store):
    with pytest.raises(NotFoundError):
        service.create_payment_and_mark_work_days(store, "nobody", ids("2024-01-08"))
    with pytest.raises(NotFoundError):
        service.create_payment_and_mark_work_days(store, "e1", ["missing"])


def test_unmark_requires_confirmation_when_payment_exists(store):
    payment = service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08", "2024-01-09"))

    result = service.unmark_work_days_as_paid(store, ids("2024-01-08"))

    assert result.requires_confirmation
    assert result.affected_payment_ids == [payment.id]
    assert "1 payment record(s)" in result.confirmation_message
    assert store.work_days["e1-2024-01-08"].paid


def test_unmark_without_payment_records(store):
    store.work_days["e1-2024-01-08"].paid = True

    result = service.unmark_work_days_as_paid(store, ids("2024-01-08"))

    assert not result.requires_confirmation
    assert result.unmarked_work_day_ids == ids("2024-01-08")
    assert not store.work_days["e1-2024-01-08"].paid


def test_force_unmark_delete_removes_payment_and_all_its_days(store):
    service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08", "2024-01-09"))

    result = service.force_unmark_work_days_as_paid(store, ids("2024-01-08"), UnmarkMode.DELETE)

    assert store.payments == {}
    assert sorted(result.unmarked_work_day_ids) == ids("2024-01-08", "2024-01-09")
    assert not store.work_days["e1-2024-01-09"].paid


def test_force_unmark_adjust_shrinks_payment(store):
    payment = service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08", "2024-01-09"), amount=Decimal("150"))

    service.force_unmark_work_days_as_paid(store, ids("2024-01-08"), UnmarkMode.ADJUST)

    adjusted = store.payments[payment.id]
    assert adjusted.work_day_ids == ids("2024-01-09")
    assert adjusted.amount == Decimal("50")
    assert store.work_days["e1-2024-01-09"].paid


def test_force_unmark_adjust_floors_at_zero_and_drops_empty_payments(store):
    small = service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08", "2024-01-09"), amount=Decimal("30"))
    single = service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-10"))

    service.force_unmark_work_days_as_paid(store, ids("2024-01-08", "2024-01-10"), UnmarkMode.ADJUST)

    assert store.payments[small.id].amount == Decimal("0")
    assert single.id not in store.payments


def test_delete_payment_unmarks_days(store):
    payment = service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08"))

    service.delete_payment(store, payment.id)

    assert store.payments == {}
    assert not store.work_days["e1-2024-01-08"].paid
    with pytest.raises(NotFoundError):
        service.delete_payment(store, payment.id)


def test_change_wage_records_history_and_note(store):
    employee = service.change_wage(store, "e1", Decimal("120"), "2024-01-09")

    assert employee.previous_wage == Decimal("100")
    assert employee.wage_change_date == "2024-01-09"
    assert employee.daily_wage == Decimal("120")
    assert "Wage changed from £100/day to £120/day on 2024-01-09" in employee.notes
    assert service.payment_preview(store, "e1", ids("2024-01-08", "2024-01-09")) == Decimal("220")


def test_change_wage_rejects_bad_input(store):
    with pytest.raises(ValidationError):
        service.change_wage(store, "e1", Decimal("120"), "tomorrow")
    with pytest.raises(ValidationError):
        service.change_wage(store, "e1", Decimal("-1"), "2024-01-09")


def test_delete_employee_cascades(store):
    service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08"))

    service.delete_employee(store, "e1")

    assert store.employees == {}
    assert store.work_days == {}
    assert store.payments == {}


def test_schedule_keeps_paid_flag_and_validates(store):
    service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08"))

    updated = service.schedule_work_day(store, "e1", "2024-01-08", worked=True, notes="  long day ")

    assert updated.paid
    assert updated.notes == "long day"
    with pytest.raises(ValidationError):
        service.schedule_work_day(store, "e1", "2024-02-30")
    with pytest.raises(ValidationError):
        service.schedule_work_day(store, "e1", "2024-02-01", custom_amount=Decimal("-3"))


def test_toggle_worked(store):
    created = service.toggle_worked(store, "e1", "2024-01-15")
    flipped = service.toggle_worked(store, "e1", "2024-01-15")

    assert created.worked
    assert not flipped.worked


def test_day_note(store):
    note = service.add_day_note(store, "2024-01-08", " Bank holiday ")

    assert note.is_day_note
    assert note.notes == "Bank holiday"
    with pytest.raises(ValidationError):
        service.add_day_note(store, "2024-01-08", "   ")


def test_delete_work_day_adjusts_covering_payment(store):
    payment = service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08", "2024-01-09"))

    service.delete_work_day(store, "e1-2024-01-08")

    assert "e1-2024-01-08" not in store.work_days
    assert store.payments[payment.id].work_day_ids == ids("2024-01-09")
    assert store.payments[payment.id].amount == Decimal("100")


def test_unpaid_work_days_excludes_future_and_paid(store):
    service.schedule_work_day(store, "e1", "2024-02-01", worked=True)
    service.create_payment_and_mark_work_days(store, "e1", ids("2024-01-08"))

    unpaid = service.unpaid_work_days(store, "e1", today="2024-01-31")

    assert [d.id for d in unpaid] == ids("2024-01-09", "2024-01-10")


def test_save_work_days_rejects_the_whole_batch(store):
    batch = [
        WorkDay(id="a", employee_id="e1", date="2024-01-11", worked=True),
        WorkDay(id="b", employee_id="e1", date="2024-13-45", worked=True),
    ]

    with pytest.raises(ValidationError):
        service.save_work_days(store, batch)

    assert "a" not in store.work_days
    assert "a" not in DataStore(store.path).work_days


def test_save_work_days_stores_every_record(store):
    batch = [
        WorkDay(id="a", employee_id="e1", date="2024-01-11", worked=True),
        WorkDay(id="b", employee_id="e1", date="2024-01-12"),
    ]

    service.save_work_days(store, batch)

    assert {"a", "b"} <= set(DataStore(store.path).work_days)


@pytest.mark.parametrize("wage", ["NaN", "Infinity"])
def test_non_finite_wages_are_rejected(store, wage):
    with pytest.raises(ValidationError):
        service.change_wage(store, "e1", Decimal(wage), "2024-01-09")
    with pytest.raises(ValidationError):
        service.add_employee(store, name="Bob", daily_wage=Decimal(wage))


def test_wage_change_note_uses_configured_currency(store, monkeypatch):
    monkeypatch.setattr(service, "get_settings", lambda: Settings(currency_symbol="US$"))

    employee = service.change_wage(store, "e1", Decimal("120"), "2024-01-09")

    assert "Wage changed from US$100/day to US$120/day on 2024-01-09" in employee.notes
