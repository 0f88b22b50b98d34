"""Student report schemas."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from school_admin.core.enums import FinancialStatus
from school_admin.core.schemas import CamelModel


class FeeBreakdownItem(CamelModel):
    type: str
    required: Decimal
    paid: Decimal
    pending: Decimal


class LedgerSummary(CamelModel):
    fees_breakdown: List[FeeBreakdownItem] = Field(default_factory=list)
    total_fees: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    total_pending: Decimal = Decimal("0")


class DiscountSummary(CamelModel):
    total_discount: Decimal = Decimal("0")
    discount_percentage: int = 0
    final_pending: Decimal = Decimal("0")


class AttendanceSummary(CamelModel):
    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    attendance_rate: int = 100
    absence_rate: int = 0


class AttendanceDay(CamelModel):
    date: date
    status: str


class DiscountItem(CamelModel):
    amount: Decimal
    percentage: Optional[Decimal] = None
    reason: str
    approved_by: str
    approval_date: date


class ReportStudent(CamelModel):
    id: str
    name: str
    grade: str
    section: str
    grade_section: str
    phone: Optional[str] = None
    email: Optional[str] = None
    admission_date: Optional[date] = None
    status: str


class StudentReport(CamelModel):
    student: ReportStudent
    attendance: List[AttendanceDay]
    attendance_rate: int
    absence_rate: int
    fees_breakdown: List[FeeBreakdownItem]
    total_fees: Decimal
    total_paid: Decimal
    total_pending: Decimal
    discounts: List[DiscountItem]
    total_discount: Decimal
    discount_percentage: int
    final_pending: Decimal
    financial_status: FinancialStatus
