"""Payment recording and deletion."""

import logging
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import NotFoundError
from school_admin.core.models import FeeType, Payment, Student
from school_admin.core.validation import ensure_exists, ensure_in_range, require_fields
from school_admin.db.executor import QueryExecutor

from .schemas import PaymentCreate, PaymentResponse

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_METHOD = "cash"


async def record_payment(executor: QueryExecutor, payload: PaymentCreate) -> PaymentResponse:
    require_fields(payload.model_dump(), ("student_id", "fee_type_id", "amount"))
    ensure_in_range(payload.amount, "amount", minimum=Decimal("0"), exclusive_minimum=True)

    async def _record(session: AsyncSession) -> PaymentResponse:
        await ensure_exists(session, Student, payload.student_id, "student_id", "student")
        await ensure_exists(session, FeeType, payload.fee_type_id, "fee_type_id", "fee type")
        payment = Payment(
            student_id=payload.student_id,
            fee_type_id=payload.fee_type_id,
            amount=payload.amount,
            payment_date=payload.payment_date or date.today(),
            payment_method=(payload.payment_method or DEFAULT_PAYMENT_METHOD).strip().lower(),
            receipt_number=payload.receipt_number,
            notes=payload.notes,
        )
        session.add(payment)
        await session.flush()
        return PaymentResponse.model_validate(payment)

    payment = await executor.execute_in_transaction(_record)
    logger.info("Recorded payment %s of %s for student %s", payment.id, payment.amount, payment.student_id)
    return payment


async def delete_payment(executor: QueryExecutor, payment_id: UUID) -> None:
    async def _delete(session: AsyncSession) -> int:
        result = await session.execute(delete(Payment).where(Payment.id == payment_id))
        return result.rowcount

    if not await executor.execute_in_transaction(_delete):
        raise NotFoundError("Payment not found", field="payment_id", value=str(payment_id))
    logger.info("Deleted payment %s", payment_id)
