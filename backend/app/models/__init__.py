from .employee import Employee
from .payment import Payment
from .work_day import WorkDay

__all__ = ["Employee", "WorkDay", "Payment"]
