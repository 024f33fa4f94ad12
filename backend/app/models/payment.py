from sqlalchemy import JSON, Column, Numeric, String, Text

from app.db.session import Base
from mydays import models as domain


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(64), primary_key=True, index=True)
    employee_id = Column(String(64), nullable=False, index=True)
    work_day_ids = Column(JSON, nullable=False, default=list)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_type = Column(String(32), nullable=False, default=domain.PaymentType.BANK_TRANSFER.value)
    date = Column(String(10), nullable=False, index=True)
    created_at = Column(String(40), nullable=False)
    notes = Column(Text, nullable=True)

    def to_domain(self) -> domain.Payment:
        return domain.Payment(
            id=self.id,
            employee_id=self.employee_id,
            work_day_ids=list(self.work_day_ids or []),
            amount=self.amount,
            payment_type=domain.PaymentType(self.payment_type),
            date=self.date,
            created_at=self.created_at,
            notes=self.notes,
        )

    def update_from(self, payment: domain.Payment) -> None:
        self.employee_id = payment.employee_id
        # Assign a fresh list so the JSON column registers the change
        self.work_day_ids = list(payment.work_day_ids)
        self.amount = payment.amount
        self.payment_type = payment.payment_type.value
        self.date = payment.date
        self.created_at = payment.created_at
        self.notes = payment.notes
