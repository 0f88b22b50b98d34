"""School-wide counters for the dashboard."""

from datetime import date
from typing import Optional

from sqlalchemy import func, select

from school_admin.api.v1.reports.reconciliation import to_decimal
from school_admin.core.enums import AttendanceStatus, StudentStatus
from school_admin.core.models import AttendanceRecord, FeeType, Payment, Student
from school_admin.db.executor import QueryExecutor

from .schemas import DashboardStats


async def _count_attendance(executor: QueryExecutor, day: date, status: AttendanceStatus) -> int:
    count = await executor.scalar(
        select(func.count(AttendanceRecord.id)).where(
            AttendanceRecord.date == day,
            AttendanceRecord.status == status.value,
        )
    )
    return int(count or 0)


async def get_dashboard_stats(executor: QueryExecutor, today: Optional[date] = None) -> DashboardStats:
    """
    fees_due is an approximation: sum of mandatory fee-type amounts minus
    payments against mandatory fee types, school-wide. It ignores discounts
    and how many students each fee applies to, so it will not match the sum
    of per-student report balances.
    """
    day = today or date.today()

    active = await executor.scalar(
        select(func.count(Student.id)).where(Student.status == StudentStatus.ACTIVE.value)
    )
    present = await _count_attendance(executor, day, AttendanceStatus.PRESENT)
    absent = await _count_attendance(executor, day, AttendanceStatus.ABSENT)

    mandatory_total = await executor.scalar(
        select(func.coalesce(func.sum(FeeType.amount), 0)).where(FeeType.is_mandatory.is_(True))
    )
    mandatory_paid = await executor.scalar(
        select(func.coalesce(func.sum(Payment.amount), 0))
        .join(FeeType, Payment.fee_type_id == FeeType.id)
        .where(FeeType.is_mandatory.is_(True))
    )

    return DashboardStats(
        total_students=int(active or 0),
        attendance_today=present,
        absent_today=absent,
        fees_due=to_decimal(mandatory_total) - to_decimal(mandatory_paid),
    )
