from sqlalchemy import Boolean, Column, Numeric, String, Text

from app.db.session import Base
from mydays import models as domain


class WorkDay(Base):
    __tablename__ = "work_days"

    id = Column(String(100), primary_key=True, index=True)
    # No foreign key: day notes belong to a pseudo employee
    employee_id = Column(String(64), nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)
    worked = Column(Boolean, nullable=False, default=False)
    paid = Column(Boolean, nullable=False, default=False)
    custom_amount = Column(Numeric(12, 2), nullable=True)
    notes = Column(Text, nullable=True)

    def to_domain(self) -> domain.WorkDay:
        return domain.WorkDay(
            id=self.id,
            employee_id=self.employee_id,
            date=self.date,
            worked=bool(self.worked),
            paid=bool(self.paid),
            custom_amount=self.custom_amount,
            notes=self.notes,
        )

    def update_from(self, work_day: domain.WorkDay) -> None:
        self.employee_id = work_day.employee_id
        self.date = work_day.date
        self.worked = work_day.worked
        self.paid = work_day.paid
        self.custom_amount = work_day.custom_amount
        self.notes = work_day.notes
