from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict

from .models import DayStatus


@dataclass(frozen=True)
class StatusStyle:
    label: str
    symbol: str
    color: str


STATUS_STYLES: Dict[DayStatus, StatusStyle] = {
    DayStatus.SCHEDULED: StatusStyle(label="Scheduled", symbol="S", color="blue"),
    DayStatus.WORKED_PAID: StatusStyle(label="Worked & paid", symbol="P", color="green"),
    DayStatus.WORKED_UNPAID: StatusStyle(label="Worked, unpaid", symbol="U", color="amber"),
    DayStatus.NOT_WORKED: StatusStyle(label="Not worked", symbol="x", color="red"),
    DayStatus.NOT_SCHEDULED: StatusStyle(label="Not scheduled", symbol=".", color="gray"),
}


def style_for(status: DayStatus) -> StatusStyle:
    return STATUS_STYLES[status]


def format_money(amount: Decimal, currency: str = "£") -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency}{abs(amount):,.2f}"
