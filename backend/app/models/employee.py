from datetime import datetime

from sqlalchemy import Column, DateTime, Numeric, String, Text

from app.db.session import Base
from mydays import models as domain


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    daily_wage = Column(Numeric(12, 2), nullable=False, default=0)

    # Wage history: days before wage_change_date are paid at previous_wage
    wage_change_date = Column(String(10), nullable=True)
    previous_wage = Column(Numeric(12, 2), nullable=True)

    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    start_date = Column(String(10), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_domain(self) -> domain.Employee:
        return domain.Employee(
            id=self.id,
            name=self.name,
            daily_wage=self.daily_wage,
            wage_change_date=self.wage_change_date,
            previous_wage=self.previous_wage,
            email=self.email,
            phone=self.phone,
            start_date=self.start_date,
            notes=self.notes,
        )

    def update_from(self, employee: domain.Employee) -> None:
        self.name = employee.name
        self.daily_wage = employee.daily_wage
        self.wage_change_date = employee.wage_change_date
        self.previous_wage = employee.previous_wage
        self.email = employee.email
        self.phone = employee.phone
        self.start_date = employee.start_date
        self.notes = employee.notes
