from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.core.logging import get_logger
from app.core.observability import payments_created, work_days_unmarked
from app.db.store import SqlStore, get_store
from mydays import payments as service
from mydays.models import DateRange, Payment, PaymentType, UnmarkMode, UnmarkResult
from mydays.stats import filter_payments

router = APIRouter(prefix="/payments", tags=["payments"])
logger = get_logger(__name__)


class PaymentCreate(BaseModel):
    employee_id: str
    work_day_ids: list[str] = Field(..., min_length=1)
    amount: Decimal | None = Field(default=None, ge=0)
    payment_type: PaymentType = PaymentType.BANK_TRANSFER
    date: str | None = None
    notes: str | None = None


class PaymentOut(BaseModel):
    id: str
    employee_id: str
    work_day_ids: list[str]
    amount: Decimal
    payment_type: PaymentType
    date: str
    created_at: str
    notes: str | None = None


class UnmarkRequest(BaseModel):
    work_day_ids: list[str] = Field(..., min_length=1)


class ForceUnmarkRequest(UnmarkRequest):
    mode: UnmarkMode = UnmarkMode.DELETE


class UnmarkOut(BaseModel):
    requires_confirmation: bool
    confirmation_message: str | None = None
    affected_payment_ids: list[str] = []
    unmarked_work_day_ids: list[str] = []


def _out(payment: Payment) -> PaymentOut:
    return PaymentOut(
        id=payment.id,
        employee_id=payment.employee_id,
        work_day_ids=list(payment.work_day_ids),
        amount=payment.amount,
        payment_type=payment.payment_type,
        date=payment.date,
        created_at=payment.created_at,
        notes=payment.notes,
    )


def _unmark_out(result: UnmarkResult) -> UnmarkOut:
    if result.unmarked_work_day_ids:
        work_days_unmarked.add(len(result.unmarked_work_day_ids))
    return UnmarkOut(
        requires_confirmation=result.requires_confirmation,
        confirmation_message=result.confirmation_message,
        affected_payment_ids=result.affected_payment_ids,
        unmarked_work_day_ids=result.unmarked_work_day_ids,
    )


@router.get("", response_model=list[PaymentOut])
def list_payments(
    employee_id: str | None = None,
    start: str | None = None,
    end: str | None = None,
    store: SqlStore = Depends(get_store),
):
    payments = filter_payments(
        store.find_payments(),
        [employee_id] if employee_id else None,
        DateRange(start, end),
    )
    return [_out(payment) for payment in payments]


@router.post("", response_model=PaymentOut, status_code=201)
def create_payment(payload: PaymentCreate, store: SqlStore = Depends(get_store)):
    payment = service.create_payment_and_mark_work_days(
        store,
        payload.employee_id,
        payload.work_day_ids,
        amount=payload.amount,
        payment_type=payload.payment_type,
        notes=payload.notes,
        payment_date=payload.date,
    )
    payments_created.add(1, {"payment_type": payment.payment_type.value})
    return _out(payment)


@router.post("/unmark", response_model=UnmarkOut)
def unmark_work_days(payload: UnmarkRequest, store: SqlStore = Depends(get_store)):
    result = service.unmark_work_days_as_paid(store, payload.work_day_ids)
    if result.requires_confirmation:
        logger.info("unmark_needs_confirmation", payments=result.affected_payment_ids)
    return _unmark_out(result)


@router.post("/force-unmark", response_model=UnmarkOut)
def force_unmark_work_days(payload: ForceUnmarkRequest, store: SqlStore = Depends(get_store)):
    return _unmark_out(service.force_unmark_work_days_as_paid(store, payload.work_day_ids, payload.mode))


@router.delete("/{payment_id}", status_code=204)
def delete_payment(payment_id: str, store: SqlStore = Depends(get_store)):
    service.delete_payment(store, payment_id)
    return None
