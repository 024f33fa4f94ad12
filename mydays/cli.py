from __future__ import annotations
import argparse
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from .config import get_settings
from .csv_io import export_payments, export_work_days, import_work_days
from .errors import MyDaysError, NotFoundError
from .history import build_activity_log
from .integrity import check_integrity
from .logging import configure_logging
from .models import DateRange, PaymentType, UnmarkMode
from .payments import (
    add_day_note,
    add_employee,
    change_wage,
    create_payment_and_mark_work_days,
    delete_payment,
    force_unmark_work_days_as_paid,
    payment_preview,
    save_work_days,
    schedule_work_day,
    toggle_worked,
    unmark_work_days_as_paid,
    unpaid_work_days,
)
from .presentation import format_money
from .stats import aggregate, employee_stats
from .storage import DataStore
from .views import count_by_status, format_calendar, format_employee_summary, format_work_history


def store_from_args(args: argparse.Namespace) -> DataStore:
    return DataStore(Path(args.data) if args.data else get_settings().data_path)


def parse_amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    return amount


def today(args: argparse.Namespace) -> str:
    return args.today or date.today().isoformat()


def date_range_from_args(args: argparse.Namespace) -> DateRange | None:
    if not (args.start or args.end):
        return None
    return DateRange(start=args.start, end=args.end)


def require_employee(store: DataStore, employee_id: str):
    employee = store.employees.get(employee_id)
    if employee is None:
        raise NotFoundError("Employee", employee_id)
    return employee


def cmd_add_employee(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    employee = add_employee(
        store,
        name=args.name,
        daily_wage=args.wage,
        employee_id=args.id,
        email=args.email,
        phone=args.phone,
        start_date=args.start_date,
    )
    print(f"Added employee {employee.id} ({employee.name})")


def cmd_change_wage(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    employee = change_wage(store, args.employee, args.wage, args.effective)
    print(f"{employee.name}: {employee.previous_wage}/day before {employee.wage_change_date}, {employee.daily_wage}/day from then")


def cmd_list_employees(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    currency = get_settings().currency_symbol
    for employee in store.list_employees():
        print(f"{employee.id} {employee.name} | wage: {format_money(employee.daily_wage, currency)}/day")


def cmd_schedule(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    work_day = schedule_work_day(
        store,
        args.employee,
        args.date,
        worked=args.worked,
        custom_amount=args.amount,
        notes=args.notes,
    )
    print(f"Saved work day {work_day.id} worked={work_day.worked} paid={work_day.paid}")


def cmd_toggle_worked(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    work_day = toggle_worked(store, args.employee, args.date)
    print(f"{work_day.id} worked={work_day.worked}")


def cmd_note(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    note = add_day_note(store, args.date, args.text)
    print(f"Saved note for {note.date}")


def cmd_pay(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    work_day_ids = args.work_day or [d.id for d in unpaid_work_days(store, args.employee, today(args))]
    currency = get_settings().currency_symbol
    if args.dry_run:
        total = payment_preview(store, args.employee, work_day_ids)
        print(f"{len(work_day_ids)} work day(s) totalling {format_money(total, currency)}")
        return
    payment = create_payment_and_mark_work_days(
        store,
        args.employee,
        work_day_ids,
        amount=args.amount,
        payment_type=PaymentType(args.type),
        notes=args.notes,
        payment_date=args.date,
    )
    print(f"Recorded payment {payment.id} of {format_money(payment.amount, currency)} for {len(payment.work_day_ids)} work day(s)")


def cmd_unmark(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    if args.force:
        result = force_unmark_work_days_as_paid(store, args.work_day, UnmarkMode(args.force))
    else:
        result = unmark_work_days_as_paid(store, args.work_day)
    if result.requires_confirmation:
        print(result.confirmation_message)
        print("Re-run with --force delete or --force adjust to continue.")
        raise SystemExit(2)
    print(f"Unmarked {len(result.unmarked_work_day_ids)} work day(s); payments affected: {len(result.affected_payment_ids)}")


def cmd_delete_payment(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    payment = delete_payment(store, args.id)
    print(f"Deleted payment {payment.id} and unmarked {len(payment.work_day_ids)} work day(s)")


def cmd_stats(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    snapshot = store.snapshot()
    date_range = date_range_from_args(args)
    currency = get_settings().currency_symbol
    if args.employee:
        employee = require_employee(store, args.employee)
        stats = employee_stats(employee, snapshot.work_days, snapshot.payments, date_range)
        print(format_employee_summary(employee, stats, currency))
        counts = count_by_status(employee, snapshot.work_days, today(args))
        print("  ".join(f"{status.value}: {count}" for status, count in counts.items() if count))
        return
    stats = aggregate(snapshot.employees, snapshot.work_days, snapshot.payments, date_range)
    print(f"Employees: {len(snapshot.employees)}  Days worked: {stats.total_worked}  Days paid: {stats.total_paid_days}")
    print(
        f"Earned: {format_money(stats.total_earned, currency)}  Paid: {format_money(stats.total_paid, currency)}  "
        f"Owed: {format_money(stats.total_owed, currency)}"
    )


def cmd_calendar(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    employee = require_employee(store, args.employee)
    snapshot = store.snapshot()
    print(
        format_calendar(
            employee, snapshot.work_days, snapshot.payments, args.year, args.month, today(args), get_settings().currency_symbol
        )
    )


def cmd_history(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    snapshot = store.snapshot()
    paid = {"paid": True, "unpaid": False}.get(args.paid)
    print(
        format_work_history(
            snapshot.employees,
            snapshot.work_days,
            snapshot.payments,
            today(args),
            employee_ids=args.employee,
            date_range=date_range_from_args(args),
            paid=paid,
            currency=get_settings().currency_symbol,
        )
    )


def cmd_activity(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    snapshot = store.snapshot()
    for activity in build_activity_log(snapshot.employees, snapshot.work_days, snapshot.payments, get_settings().currency_symbol)[: args.limit]:
        print(f"{activity.timestamp[:10]}  {activity.employee_name:<20}  {activity.description}")


def cmd_check(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    snapshot = store.snapshot()
    problems = check_integrity(snapshot.employees, snapshot.work_days, snapshot.payments)
    for problem in problems:
        print(f"[{problem.kind.value}] {problem.record_id or '-'}: {problem.message}")
    if not problems:
        print("No problems found")


def cmd_export(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    path = Path(args.path)
    if args.payments:
        export_payments(path, store.find_payments(args.employee))
    else:
        export_work_days(path, store.find_work_days(args.employee), store.employees)
    print(f"Exported to {path}")


def cmd_import(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    path = Path(args.path)
    work_days = save_work_days(store, import_work_days(path))
    print(f"Imported {len(work_days)} work days from {path}")


def add_range_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", help="First ISO date included")
    parser.add_argument("--end", help="Last ISO date included")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="My Days work and payment tracker")
    parser.add_argument("--data", help="Path to the JSON data store")
    parser.add_argument("--today", help="Override today's date (ISO)")
    sub = parser.add_subparsers(dest="command", required=True)

    employee = sub.add_parser("add-employee", help="Add an employee")
    employee.add_argument("name")
    employee.add_argument("wage", type=parse_amount, help="Daily wage")
    employee.add_argument("--id")
    employee.add_argument("--email")
    employee.add_argument("--phone")
    employee.add_argument("--start-date")
    employee.set_defaults(func=cmd_add_employee)

    wage = sub.add_parser("change-wage", help="Change an employee's daily wage from a date")
    wage.add_argument("employee")
    wage.add_argument("wage", type=parse_amount)
    wage.add_argument("effective", help="First ISO date the new wage applies")
    wage.set_defaults(func=cmd_change_wage)

    list_employees = sub.add_parser("list-employees", help="List employees by name")
    list_employees.set_defaults(func=cmd_list_employees)

    schedule = sub.add_parser("schedule", help="Schedule or record a work day")
    schedule.add_argument("employee")
    schedule.add_argument("date")
    schedule.add_argument("--worked", action="store_true", help="Mark the day as worked")
    schedule.add_argument("--amount", type=parse_amount, help="Custom amount for this day")
    schedule.add_argument("--notes")
    schedule.set_defaults(func=cmd_schedule)

    toggle = sub.add_parser("toggle-worked", help="Flip the worked flag for a day")
    toggle.add_argument("employee")
    toggle.add_argument("date")
    toggle.set_defaults(func=cmd_toggle_worked)

    note = sub.add_parser("note", help="Attach a note to a calendar day")
    note.add_argument("date")
    note.add_argument("text")
    note.set_defaults(func=cmd_note)

    pay = sub.add_parser("pay", help="Record a payment and mark work days paid")
    pay.add_argument("employee")
    pay.add_argument("--work-day", action="append", help="Work day id (defaults to every unpaid worked day)")
    pay.add_argument("--amount", type=parse_amount, help="Override the resolved total")
    pay.add_argument("--type", choices=[t.value for t in PaymentType], default=PaymentType.BANK_TRANSFER.value)
    pay.add_argument("--date", help="Payment date (ISO)")
    pay.add_argument("--notes")
    pay.add_argument("--dry-run", action="store_true", help="Only show the amount that would be paid")
    pay.set_defaults(func=cmd_pay)

    unmark = sub.add_parser("unmark", help="Unmark work days as paid")
    unmark.add_argument("work_day", nargs="+")
    unmark.add_argument("--force", choices=[m.value for m in UnmarkMode], help="Delete or adjust covering payments")
    unmark.set_defaults(func=cmd_unmark)

    delete = sub.add_parser("delete-payment", help="Delete a payment and unmark its days")
    delete.add_argument("id")
    delete.set_defaults(func=cmd_delete_payment)

    stats = sub.add_parser("stats", help="Earned / paid / owed totals")
    stats.add_argument("--employee")
    add_range_arguments(stats)
    stats.set_defaults(func=cmd_stats)

    calendar = sub.add_parser("calendar", help="Render a month calendar for an employee")
    calendar.add_argument("employee")
    calendar.add_argument("year", type=int)
    calendar.add_argument("month", type=int)
    calendar.set_defaults(func=cmd_calendar)

    history = sub.add_parser("history", help="List work days with amounts and payments")
    history.add_argument("--employee", action="append")
    history.add_argument("--paid", choices=["paid", "unpaid"])
    add_range_arguments(history)
    history.set_defaults(func=cmd_history)

    activity = sub.add_parser("activity", help="Show recent activity")
    activity.add_argument("--limit", type=int, default=20)
    activity.set_defaults(func=cmd_activity)

    check = sub.add_parser("check", help="Report data integrity problems")
    check.set_defaults(func=cmd_check)

    export = sub.add_parser("export", help="Export work days (or payments) to CSV")
    export.add_argument("path")
    export.add_argument("--employee")
    export.add_argument("--payments", action="store_true")
    export.set_defaults(func=cmd_export)

    imp = sub.add_parser("import", help="Import work days from CSV")
    imp.add_argument("path")
    imp.set_defaults(func=cmd_import)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(get_settings().log_level)
    try:
        args.func(args)
    except MyDaysError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
