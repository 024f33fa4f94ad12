from decimal import Decimal

from pydantic import BaseModel

from mydays.models import Stats


class StatsOut(BaseModel):
    total_worked: int
    total_paid_days: int
    total_earned: Decimal
    total_paid: Decimal
    total_owed: Decimal
    paid_from_work_days: bool = False

    @classmethod
    def from_stats(cls, stats: Stats) -> "StatsOut":
        return cls(**stats.as_dict())
