"""Discount creation. Percentages become fixed amounts here, against the class fee total of the moment."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.v1.reports.reconciliation import resolve_percentage_discount, to_decimal
from school_admin.api.v1.reports.service import class_fee_total_stmt
from school_admin.core.models import AcademicYear, Discount, Student
from school_admin.core.validation import ensure_exists, ensure_in_range, require_fields, require_one_of
from school_admin.db.executor import QueryExecutor

from .schemas import DiscountCreate, DiscountResponse

logger = logging.getLogger(__name__)


async def create_discount(executor: QueryExecutor, payload: DiscountCreate) -> DiscountResponse:
    data = payload.model_dump()
    require_fields(data, ("student_id", "reason", "approved_by"))
    require_one_of(data, ("amount", "percentage"))
    ensure_in_range(payload.amount, "amount", minimum=Decimal("0"), exclusive_minimum=True)
    ensure_in_range(payload.percentage, "percentage", minimum=Decimal("0"), maximum=Decimal("100"), exclusive_minimum=True)

    async def _create(session: AsyncSession) -> DiscountResponse:
        await ensure_exists(session, Student, payload.student_id, "student_id", "student")
        if payload.academic_year_id is not None:
            await ensure_exists(session, AcademicYear, payload.academic_year_id, "academic_year_id", "academic year")

        amount = payload.amount
        if amount is None:
            total_fees = to_decimal((await session.execute(class_fee_total_stmt(payload.student_id))).scalar())
            amount = resolve_percentage_discount(total_fees, payload.percentage)

        discount = Discount(
            student_id=payload.student_id,
            amount=amount,
            percentage=payload.percentage,
            reason=payload.reason.strip(),
            academic_year_id=payload.academic_year_id,
            approved_by=payload.approved_by.strip(),
            approval_date=date.today(),
        )
        session.add(discount)
        await session.flush()
        return DiscountResponse.model_validate(discount)

    discount = await executor.execute_in_transaction(_create)
    logger.info("Discount %s of %s approved for student %s", discount.id, discount.amount, discount.student_id)
    return discount
