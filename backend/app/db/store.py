from __future__ import annotations

from typing import Dict, Type

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import Base, get_session
from app.models import Employee, Payment, WorkDay
from mydays.storage import DataStore


class SqlStore(DataStore):
    """DataStore whose collections live in the database instead of a JSON file.

    ``load`` reads every row into core dataclasses; ``save`` writes the
    in-memory collections back, deleting rows whose records were removed.
    The service functions in :mod:`mydays.payments` run against it unchanged.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.employees = {}
        self.work_days = {}
        self.payments = {}
        self.load()

    def load(self) -> None:
        self.employees = {row.id: row.to_domain() for row in self.session.query(Employee).all()}
        self.work_days = {row.id: row.to_domain() for row in self.session.query(WorkDay).all()}
        self.payments = {row.id: row.to_domain() for row in self.session.query(Payment).all()}

    def save(self) -> None:
        self._sync(Employee, self.employees)
        self._sync(WorkDay, self.work_days)
        self._sync(Payment, self.payments)
        self.session.commit()

    def _sync(self, model: Type[Base], records: Dict[str, object]) -> None:
        rows = {row.id: row for row in self.session.query(model).all()}
        for row_id, row in rows.items():
            if row_id not in records:
                self.session.delete(row)
        for record_id, record in records.items():
            row = rows.get(record_id)
            if row is None:
                row = model(id=record_id)
                self.session.add(row)
            row.update_from(record)


def get_store(db: Session = Depends(get_session)) -> SqlStore:
    return SqlStore(db)
