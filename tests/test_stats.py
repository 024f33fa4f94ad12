from decimal import Decimal

from mydays.models import DateRange, Employee, Payment, PaymentType, Stats, WorkDay
from mydays.stats import aggregate, employee_stats, filter_payments, stats_by_employee, to_currency


def employee(employee_id="e1", wage="100", **extra):
    return Employee(id=employee_id, name=employee_id.upper(), daily_wage=Decimal(wage), **extra)


def work_day(day, employee_id="e1", worked=True, paid=False, custom=None):
    return WorkDay(
        id=f"{employee_id}-{day}",
        employee_id=employee_id,
        date=day,
        worked=worked,
        paid=paid,
        custom_amount=None if custom is None else Decimal(custom),
    )


def payment(amount, day_ids, employee_id="e1", on="2024-01-20", payment_id="p1"):
    return Payment(
        id=payment_id,
        employee_id=employee_id,
        work_day_ids=list(day_ids),
        amount=Decimal(amount),
        payment_type=PaymentType.CASH,
        date=on,
        created_at=f"{on}T10:00:00+00:00",
    )


def test_empty_inputs_are_all_zero():
    stats = aggregate(employee(), [], [])

    assert stats == Stats()
    assert stats.total_owed == Decimal("0")


def test_single_worked_unpaid_day():
    stats = employee_stats(employee(), [work_day("2024-01-10")], [])

    assert stats.total_worked == 1
    assert stats.total_earned == Decimal("100")
    assert stats.total_paid == Decimal("0")
    assert stats.total_owed == Decimal("100")


def test_payments_are_authoritative_over_resolved_amounts():
    days = [work_day("2024-01-10", paid=True)]

    stats = employee_stats(employee(), days, [payment("90", ["e1-2024-01-10"])])

    assert stats.total_paid == Decimal("90")
    assert stats.total_owed == Decimal("10")
    assert not stats.paid_from_work_days


def test_paid_days_without_payment_records_use_fallback():
    days = [work_day("2024-01-10", paid=True), work_day("2024-01-11", custom="40", paid=True)]

    stats = employee_stats(employee(), days, [])

    assert stats.total_paid == Decimal("140")
    assert stats.total_paid_days == 2
    assert stats.paid_from_work_days


def test_paid_days_counted_even_when_not_worked():
    stats = employee_stats(employee(), [work_day("2024-01-10", worked=False, paid=True)], [])

    assert stats.total_worked == 0
    assert stats.total_paid_days == 1
    assert stats.total_earned == Decimal("0")


def test_wage_history_per_employee():
    changed = employee(wage="100", previous_wage=Decimal("80"), wage_change_date="2024-03-01")
    days = [work_day("2024-02-28"), work_day("2024-03-01")]

    assert employee_stats(changed, days, []).total_earned == Decimal("180")


def test_aggregate_sums_employees_separately():
    a = employee("a", "100", previous_wage=Decimal("50"), wage_change_date="2024-02-01")
    b = employee("b", "80")
    days = [work_day("2024-01-10", "a"), work_day("2024-01-10", "b")]

    stats = aggregate([a, b], days, [payment("30", ["b-2024-01-10"], employee_id="b")])

    # a's earlier day uses a's previous wage, b's day is untouched by it
    assert stats.total_earned == Decimal("130")
    assert stats.total_paid == Decimal("30")
    assert stats.total_owed == stats.total_earned - stats.total_paid


def test_ghost_employee_days_are_excluded():
    days = [work_day("2024-01-10"), work_day("2024-01-10", "ghost", paid=True)]
    payments = [payment("500", ["ghost-2024-01-10"], employee_id="ghost")]

    stats = aggregate([employee()], days, payments)

    assert stats.total_worked == 1
    assert stats.total_earned == Decimal("100")
    assert stats.total_paid == Decimal("0")


def test_date_range_filters_days_and_payments_by_their_own_dates():
    days = [work_day("2024-01-10", paid=True), work_day("2024-02-10")]
    payments = [payment("100", ["e1-2024-01-10"], on="2024-02-01")]

    january = employee_stats(employee(), days, payments, DateRange("2024-01-01", "2024-01-31"))
    february = employee_stats(employee(), days, payments, DateRange("2024-02-01", "2024-02-29"))
    whole = employee_stats(employee(), days, payments)

    assert january.total_earned == Decimal("100")
    # the payment falls in February; its day is covered, so no fallback in January
    assert january.total_paid == Decimal("0")
    assert not january.paid_from_work_days
    assert february.total_paid == Decimal("100")
    assert january.total_paid + february.total_paid == whole.total_paid
    assert january.total_owed + february.total_owed == whole.total_owed


def test_fallback_only_sums_days_no_payment_covers():
    days = [work_day("2024-01-10", paid=True), work_day("2024-01-11", paid=True, custom="40")]
    payments = [payment("100", ["e1-2024-01-10"], on="2024-02-01")]

    stats = employee_stats(employee(), days, payments, DateRange("2024-01-01", "2024-01-31"))

    assert stats.total_paid == Decimal("40")
    assert stats.paid_from_work_days


def test_stats_by_employee_keys_by_id():
    result = stats_by_employee([employee("a"), employee("b")], [work_day("2024-01-10", "a")], [])

    assert set(result) == {"a", "b"}
    assert result["b"] == Stats()


def test_currency_rounding_is_half_up():
    assert to_currency(Decimal("10.005")) == Decimal("10.01")
    assert to_currency(Decimal("10.004")) == Decimal("10.00")


def test_filter_payments_by_employee():
    payments = [payment("1", [], payment_id="p1"), payment("2", [], employee_id="e2", payment_id="p2")]

    assert [p.id for p in filter_payments(payments, ["e2"])] == ["p2"]
