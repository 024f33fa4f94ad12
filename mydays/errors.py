from __future__ import annotations


class MyDaysError(Exception):
    """Base class for errors raised by the My Days services."""


class ValidationError(MyDaysError):
    """Raised when a record is malformed (bad date, negative amount, ...)."""

    def __init__(self, message: str, diagnostics: list | None = None):
        super().__init__(message)
        self.diagnostics = diagnostics or []


class NotFoundError(MyDaysError):
    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class PaymentConflictError(MyDaysError):
    """Raised when a payment would cover days that cannot be paid."""
