from decimal import Decimal

from mydays.integrity import DiagnosticKind, check_integrity, parse_iso_date, related_payment
from mydays.models import DAY_NOTE_EMPLOYEE_ID, Employee, Payment, PaymentType, WorkDay


def kinds(problems):
    return sorted(p.kind.value for p in problems)


def make_payment(amount, day_ids, employee_id="e1"):
    return Payment(
        id="p1",
        employee_id=employee_id,
        work_day_ids=day_ids,
        amount=Decimal(amount),
        payment_type=PaymentType.BANK_TRANSFER,
        date="2024-01-20",
        created_at="2024-01-20T09:00:00+00:00",
    )


def test_parse_iso_date_is_strict():
    assert parse_iso_date("2024-02-29") is not None
    assert parse_iso_date("2023-02-29") is None
    assert parse_iso_date("2024-1-5") is None
    assert parse_iso_date(None) is None


def test_clean_data_has_no_problems():
    employees = [Employee(id="e1", name="A", daily_wage=Decimal("100"))]
    days = [WorkDay(id="w1", employee_id="e1", date="2024-01-10", worked=True, paid=True)]

    assert check_integrity(employees, days, [make_payment("100", ["w1"])]) == []


def test_flags_each_kind_of_anomaly():
    employees = [
        Employee(id="e1", name="A", daily_wage=Decimal("100"), wage_change_date="2024-01-01"),
        Employee(id="e2", name="B", daily_wage=Decimal("-5")),
    ]
    days = [
        WorkDay(id="w1", employee_id="e1", date="2024-01-10", worked=True, paid=True),
        WorkDay(id="w2", employee_id="ghost", date="2024-01-10", worked=True),
        WorkDay(id="w3", employee_id="e1", date="10/01/2024", worked=True),
        WorkDay(id="w4", employee_id="e1", date="2024-01-12", worked=True, paid=True),
    ]
    payments = [make_payment("90", ["w4"])]

    problems = check_integrity(employees, days, payments)

    assert kinds(problems) == sorted(
        [
            DiagnosticKind.INCONSISTENT_WAGE_HISTORY.value,
            DiagnosticKind.NEGATIVE_AMOUNT.value,
            DiagnosticKind.PAID_WITHOUT_PAYMENT.value,
            DiagnosticKind.UNKNOWN_EMPLOYEE.value,
            DiagnosticKind.MALFORMED_DATE.value,
            DiagnosticKind.PAYMENT_AMOUNT_MISMATCH.value,
        ]
    )


def test_day_notes_are_not_reported_as_unknown_employees():
    note = WorkDay(id="n1", employee_id=DAY_NOTE_EMPLOYEE_ID, date="2024-01-10", notes="holiday")

    assert check_integrity([], [note], []) == []


def test_related_payment_finds_covering_payment():
    day = WorkDay(id="w1", employee_id="e1", date="2024-01-10")

    assert related_payment(day, [make_payment("1", ["w1"])]).id == "p1"
    assert related_payment(day, [make_payment("1", ["w2"])]) is None


def test_non_finite_amounts_are_reported_not_raised():
    employees = [Employee(id="e1", name="A", daily_wage=Decimal("NaN"))]
    days = [WorkDay(id="w1", employee_id="e1", date="2024-01-10", worked=True, custom_amount=Decimal("Infinity"))]
    payment = make_payment("NaN", ["w1"])

    problems = check_integrity(employees, days, [payment])

    invalid = [p.record_id for p in problems if p.kind is DiagnosticKind.INVALID_AMOUNT]
    assert sorted(invalid) == ["e1", "p1", "w1"]
    assert DiagnosticKind.NEGATIVE_AMOUNT not in {p.kind for p in problems}
