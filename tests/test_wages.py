from decimal import Decimal

from mydays.models import Employee, WorkDay
from mydays.wages import resolve_amount, resolve_total


def make_employee(**overrides):
    values = {"id": "e1", "name": "A", "daily_wage": Decimal("100")}
    values.update(overrides)
    return Employee(**values)


def make_day(day="2024-01-10", **overrides):
    return WorkDay(id=f"w-{day}", employee_id="e1", date=day, worked=True, **overrides)


def test_daily_wage_applies_without_history():
    assert resolve_amount(make_day(), make_employee()) == Decimal("100")


def test_custom_amount_wins_even_when_zero():
    day = make_day(custom_amount=Decimal("0"))

    assert resolve_amount(day, make_employee()) == Decimal("0")


def test_custom_amount_overrides_wage_history():
    employee = make_employee(previous_wage=Decimal("80"), wage_change_date="2024-03-01")

    assert resolve_amount(make_day("2024-02-01", custom_amount=Decimal("55.50")), employee) == Decimal("55.50")


def test_wage_change_splits_on_effective_date():
    employee = make_employee(previous_wage=Decimal("80"), wage_change_date="2024-03-01")

    assert resolve_amount(make_day("2024-02-28"), employee) == Decimal("80")
    assert resolve_amount(make_day("2024-03-01"), employee) == Decimal("100")
    assert resolve_amount(make_day("2024-03-02"), employee) == Decimal("100")


def test_partial_wage_history_falls_back_to_daily_wage():
    only_date = make_employee(wage_change_date="2024-03-01")
    only_wage = make_employee(previous_wage=Decimal("80"))

    assert resolve_amount(make_day("2024-01-01"), only_date) == Decimal("100")
    assert resolve_amount(make_day("2024-01-01"), only_wage) == Decimal("100")


def test_resolve_total_sums_mixed_rates():
    employee = make_employee(previous_wage=Decimal("80"), wage_change_date="2024-03-01")
    days = [make_day("2024-02-28"), make_day("2024-03-04"), make_day("2024-03-05", custom_amount=Decimal("0"))]

    assert resolve_total(days, employee) == Decimal("180")
    assert resolve_total([], employee) == Decimal("0")
