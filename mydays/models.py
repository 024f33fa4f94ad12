from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional


ZERO = Decimal("0")
CENT = Decimal("0.01")

# Day notes are stored as work days owned by this pseudo employee.
DAY_NOTE_EMPLOYEE_ID = "day-note"


class PaymentType(str, Enum):
    BANK_TRANSFER = "Bank Transfer"
    PAYPAL = "PayPal"
    CASH = "Cash"
    OTHER = "Other"


class DayStatus(str, Enum):
    SCHEDULED = "scheduled"
    WORKED_PAID = "worked-paid"
    WORKED_UNPAID = "worked-unpaid"
    NOT_WORKED = "not-worked"
    NOT_SCHEDULED = "not-scheduled"


class UnmarkMode(str, Enum):
    DELETE = "delete"
    ADJUST = "adjust"


@dataclass
class Employee:
    id: str
    name: str
    daily_wage: Decimal
    wage_change_date: Optional[str] = None
    previous_wage: Optional[Decimal] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    start_date: Optional[str] = None
    notes: Optional[str] = None

    @property
    def has_wage_history(self) -> bool:
        return self.wage_change_date is not None and self.previous_wage is not None


@dataclass
class WorkDay:
    id: str
    employee_id: str
    date: str
    worked: bool = False
    paid: bool = False
    custom_amount: Optional[Decimal] = None
    notes: Optional[str] = None

    @staticmethod
    def default_id(employee_id: str, day: str) -> str:
        return f"{employee_id}-{day}"

    @property
    def is_day_note(self) -> bool:
        return self.employee_id == DAY_NOTE_EMPLOYEE_ID


@dataclass
class Payment:
    id: str
    employee_id: str
    work_day_ids: List[str]
    amount: Decimal
    payment_type: PaymentType
    date: str
    created_at: str
    notes: Optional[str] = None

    def covers(self, work_day_id: str) -> bool:
        return work_day_id in self.work_day_ids


@dataclass(frozen=True)
class DateRange:
    """Inclusive ISO date range; either bound may be open."""

    start: Optional[str] = None
    end: Optional[str] = None

    def contains(self, day: str) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


@dataclass
class Stats:
    total_worked: int = 0
    total_paid_days: int = 0
    total_earned: Decimal = ZERO
    total_paid: Decimal = ZERO
    total_owed: Decimal = ZERO
    # True when total_paid was derived from paid work days because no payment
    # records matched.
    paid_from_work_days: bool = False

    def __add__(self, other: "Stats") -> "Stats":
        if not isinstance(other, Stats):
            return NotImplemented
        earned = self.total_earned + other.total_earned
        paid = self.total_paid + other.total_paid
        return Stats(
            total_worked=self.total_worked + other.total_worked,
            total_paid_days=self.total_paid_days + other.total_paid_days,
            total_earned=earned,
            total_paid=paid,
            total_owed=earned - paid,
            paid_from_work_days=self.paid_from_work_days or other.paid_from_work_days,
        )

    def as_dict(self) -> dict:
        return {
            "total_worked": self.total_worked,
            "total_paid_days": self.total_paid_days,
            "total_earned": self.total_earned,
            "total_paid": self.total_paid,
            "total_owed": self.total_owed,
            "paid_from_work_days": self.paid_from_work_days,
        }


@dataclass
class UnmarkResult:
    requires_confirmation: bool
    confirmation_message: Optional[str] = None
    affected_payment_ids: List[str] = field(default_factory=list)
    unmarked_work_day_ids: List[str] = field(default_factory=list)
