"""Student report: ledger, discounts and monthly attendance reconciled into one response."""

import asyncio
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func, select

from school_admin.core.exceptions import NotFoundError
from school_admin.core.models import AttendanceRecord, Discount, FeeType, Payment, SchoolClass, Section, Student
from school_admin.db.executor import QueryExecutor

from .reconciliation import (
    aggregate_ledger,
    analyze_attendance,
    apply_discounts,
    classify_financial_status,
    month_bounds,
    to_decimal,
)
from .schemas import AttendanceDay, DiscountItem, ReportStudent, StudentReport


def class_fee_total_stmt(student_id: str):
    """Sum of fee-type amounts for the student's class (via section)."""
    class_id = (
        select(Section.class_id)
        .join(Student, Student.section_id == Section.id)
        .where(Student.id == student_id)
        .scalar_subquery()
    )
    return select(func.coalesce(func.sum(FeeType.amount), 0).label("total")).where(FeeType.class_id == class_id)


async def _fetch_student(executor: QueryExecutor, student_id: str) -> Mapping[str, Any]:
    rows = await executor.execute(
        select(
            Student.id,
            Student.first_name,
            Student.last_name,
            Student.parent_phone,
            Student.parent_email,
            Student.admission_date,
            Student.status,
            Section.name.label("section_name"),
            SchoolClass.id.label("class_id"),
            SchoolClass.name.label("class_name"),
        )
        .join(Section, Student.section_id == Section.id)
        .join(SchoolClass, Section.class_id == SchoolClass.id)
        .where(Student.id == student_id)
    )
    if not rows:
        raise NotFoundError("Student not found", field="student_id", value=student_id)
    return rows[0]


async def fetch_class_fee_types(executor: QueryExecutor, class_id: Any) -> List[Mapping[str, Any]]:
    return await executor.execute(
        select(FeeType.id, FeeType.name, FeeType.amount)
        .where(FeeType.class_id == class_id)
        .order_by(FeeType.name)
    )


async def fetch_paid_by_fee_type(executor: QueryExecutor, student_id: str) -> Dict[Any, Decimal]:
    rows = await executor.execute(
        select(Payment.fee_type_id, func.sum(Payment.amount).label("paid"))
        .where(Payment.student_id == student_id)
        .group_by(Payment.fee_type_id)
    )
    return {row["fee_type_id"]: to_decimal(row["paid"]) for row in rows}


async def fetch_discounts(executor: QueryExecutor, student_id: str) -> List[DiscountItem]:
    rows = await executor.execute(
        select(
            Discount.amount,
            Discount.percentage,
            Discount.reason,
            Discount.approved_by,
            Discount.approval_date,
        )
        .where(Discount.student_id == student_id)
        .order_by(Discount.approval_date.desc())
    )
    return [
        DiscountItem(
            amount=to_decimal(r["amount"]),
            percentage=r["percentage"],
            reason=r["reason"],
            approved_by=r["approved_by"],
            approval_date=r["approval_date"],
        )
        for r in rows
    ]


async def fetch_month_attendance(executor: QueryExecutor, student_id: str, reference: date) -> List[AttendanceDay]:
    start, end = month_bounds(reference)
    rows = await executor.execute(
        select(AttendanceRecord.date, AttendanceRecord.status)
        .where(
            AttendanceRecord.student_id == student_id,
            AttendanceRecord.date >= start,
            AttendanceRecord.date < end,
        )
        .order_by(AttendanceRecord.date.asc())
    )
    return [AttendanceDay(date=r["date"], status=r["status"]) for r in rows]


async def get_student_report(
    executor: QueryExecutor,
    student_id: str,
    reference_date: Optional[date] = None,
) -> StudentReport:
    """
    Reads after the student lookup are independent and run concurrently, each
    in its own unit of work; there is no single snapshot across them, so a
    payment landing mid-request can make one report transiently inconsistent.
    """
    reference = reference_date or date.today()
    student = await _fetch_student(executor, student_id)

    fee_types, paid, discounts, attendance = await asyncio.gather(
        fetch_class_fee_types(executor, student["class_id"]),
        fetch_paid_by_fee_type(executor, student_id),
        fetch_discounts(executor, student_id),
        fetch_month_attendance(executor, student_id, reference),
    )

    ledger = aggregate_ledger(fee_types, paid)
    adjusted = apply_discounts(ledger.total_fees, ledger.total_pending, (d.amount for d in discounts))
    rates = analyze_attendance(day.status for day in attendance)

    grade, section = student["class_name"], student["section_name"]
    return StudentReport(
        student=ReportStudent(
            id=student["id"],
            name=f"{student['first_name']} {student['last_name']}",
            grade=grade,
            section=section,
            grade_section=f"{grade} - {section}",
            phone=student["parent_phone"],
            email=student["parent_email"],
            admission_date=student["admission_date"],
            status=student["status"],
        ),
        attendance=attendance,
        attendance_rate=rates.attendance_rate,
        absence_rate=rates.absence_rate,
        fees_breakdown=ledger.fees_breakdown,
        total_fees=ledger.total_fees,
        total_paid=ledger.total_paid,
        total_pending=ledger.total_pending,
        discounts=discounts,
        total_discount=adjusted.total_discount,
        discount_percentage=adjusted.discount_percentage,
        final_pending=adjusted.final_pending,
        financial_status=classify_financial_status(adjusted.final_pending),
    )
