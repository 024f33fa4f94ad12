from __future__ import annotations
import json
from dataclasses import asdict, dataclass
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .models import Employee, Payment, PaymentType, WorkDay


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time copy of every collection, handed to the pure core."""

    employees: Tuple[Employee, ...] = ()
    work_days: Tuple[WorkDay, ...] = ()
    payments: Tuple[Payment, ...] = ()

    def employee(self, employee_id: str) -> Optional[Employee]:
        for employee in self.employees:
            if employee.id == employee_id:
                return employee
        return None


class DataStore:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.employees: Dict[str, Employee] = {}
        self.work_days: Dict[str, WorkDay] = {}
        self.payments: Dict[str, Payment] = {}
        if path.exists():
            self.load()

    def load(self) -> None:
        content = json.loads(self.path.read_text(encoding="utf-8"))
        self.employees = {e["id"]: self._deserialize_employee(e) for e in content.get("employees", [])}
        self.work_days = {w["id"]: self._deserialize_work_day(w) for w in content.get("work_days", [])}
        self.payments = {p["id"]: self._deserialize_payment(p) for p in content.get("payments", [])}

    def save(self) -> None:
        payload = {
            "employees": [asdict(e) for e in self.employees.values()],
            "work_days": [asdict(w) for w in self.work_days.values()],
            "payments": [self._serialize_payment(p) for p in self.payments.values()],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, default=self._decimal_serializer, indent=2), encoding="utf-8")

    def add_employee(self, employee: Employee) -> None:
        self.employees[employee.id] = employee

    def add_or_update_work_day(self, work_day: WorkDay) -> None:
        self.work_days[work_day.id] = work_day

    def add_payment(self, payment: Payment) -> None:
        self.payments[payment.id] = payment

    def find_work_day(self, employee_id: str, day: str) -> Optional[WorkDay]:
        for work_day in self.work_days.values():
            if work_day.employee_id == employee_id and work_day.date == day:
                return work_day
        return None

    def find_work_days(self, employee_id: Optional[str] = None) -> List[WorkDay]:
        days = list(self.work_days.values())
        if employee_id:
            days = [d for d in days if d.employee_id == employee_id]
        return sorted(days, key=lambda d: (d.date, d.employee_id))

    def find_payments(self, employee_id: Optional[str] = None) -> List[Payment]:
        payments = list(self.payments.values())
        if employee_id:
            payments = [p for p in payments if p.employee_id == employee_id]
        return sorted(payments, key=lambda p: (p.date, p.created_at))

    def list_employees(self) -> List[Employee]:
        """Return employees ordered by display name."""

        return sorted(self.employees.values(), key=lambda e: e.name.lower())

    def snapshot(self) -> Snapshot:
        return Snapshot(
            employees=tuple(self.list_employees()),
            work_days=tuple(self.find_work_days()),
            payments=tuple(self.find_payments()),
        )

    @staticmethod
    def _decimal_serializer(value):
        if isinstance(value, Decimal):
            return str(value)
        raise TypeError(f"Type {type(value)} not serializable")

    @staticmethod
    def _parse_decimal(value) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(str(value))

    def _serialize_payment(self, payment: Payment) -> dict:
        payload = asdict(payment)
        payload["payment_type"] = payment.payment_type.value
        return payload

    def _deserialize_employee(self, data: dict) -> Employee:
        data["daily_wage"] = self._parse_decimal(data["daily_wage"])
        data["previous_wage"] = self._parse_decimal(data.get("previous_wage"))
        return Employee(**data)

    def _deserialize_work_day(self, data: dict) -> WorkDay:
        data["custom_amount"] = self._parse_decimal(data.get("custom_amount"))
        return WorkDay(**data)

    def _deserialize_payment(self, data: dict) -> Payment:
        data["amount"] = self._parse_decimal(data["amount"])
        data["payment_type"] = PaymentType(data["payment_type"])
        data["work_day_ids"] = list(data.get("work_day_ids", []))
        return Payment(**data)
