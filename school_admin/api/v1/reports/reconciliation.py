"""
Pure reconciliation steps for the student report:
ledger (required vs paid per fee type), discount adjustment, monthly
attendance rates and the financial status. No I/O; amounts are Decimal.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

from school_admin.core.enums import AttendanceStatus, FinancialStatus

from .schemas import AttendanceSummary, DiscountSummary, FeeBreakdownItem, LedgerSummary

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(val: Any) -> Decimal:
    if val is None:
        return ZERO
    return val if isinstance(val, Decimal) else Decimal(str(val))


def round_percent(part: Decimal, whole: Decimal, default: int) -> int:
    """round(part / whole * 100), half away from zero; `default` when whole is 0."""
    if whole == 0:
        return default
    ratio = (to_decimal(part) / to_decimal(whole)) * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def aggregate_ledger(
    fee_types: Sequence[Mapping[str, Any]],
    paid_by_fee_type: Mapping[Any, Any],
) -> LedgerSummary:
    """
    One breakdown line per applicable fee type (`id`, `name`, `amount` keys).
    Fee types without payments show paid = 0. Payments against fee types that
    do not apply to the class are not counted.
    """
    items = []
    total_fees = ZERO
    total_paid = ZERO
    for fee_type in fee_types:
        required = to_decimal(fee_type["amount"])
        paid = to_decimal(paid_by_fee_type.get(fee_type["id"]))
        items.append(FeeBreakdownItem(type=fee_type["name"], required=required, paid=paid, pending=required - paid))
        total_fees += required
        total_paid += paid
    return LedgerSummary(
        fees_breakdown=items,
        total_fees=total_fees,
        total_paid=total_paid,
        total_pending=total_fees - total_paid,
    )


def resolve_percentage_discount(total_fees: Decimal, percentage: Decimal) -> Decimal:
    """Fixed amount for a percentage discount, computed once at creation time."""
    amount = to_decimal(total_fees) * to_decimal(percentage) / 100
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def apply_discounts(total_fees: Decimal, total_pending: Decimal, discount_amounts: Iterable[Any]) -> DiscountSummary:
    """finalPending may go negative (credit)."""
    total_discount = sum((to_decimal(a) for a in discount_amounts), ZERO)
    return DiscountSummary(
        total_discount=total_discount,
        discount_percentage=round_percent(total_discount, to_decimal(total_fees), default=0),
        final_pending=to_decimal(total_pending) - total_discount,
    )


def month_bounds(reference: date) -> Tuple[date, date]:
    """[first day of the month, first day of the next month)."""
    start = reference.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def analyze_attendance(statuses: Iterable[str]) -> AttendanceSummary:
    # No recorded days counts as full attendance.
    statuses = list(statuses)
    total = len(statuses)
    present = sum(1 for s in statuses if s == AttendanceStatus.PRESENT.value)
    absent = sum(1 for s in statuses if s == AttendanceStatus.ABSENT.value)
    return AttendanceSummary(
        total_days=total,
        present_days=present,
        absent_days=absent,
        attendance_rate=round_percent(Decimal(present), Decimal(total), default=100),
        absence_rate=round_percent(Decimal(absent), Decimal(total), default=0),
    )


def classify_financial_status(final_pending: Optional[Decimal]) -> FinancialStatus:
    if to_decimal(final_pending) <= 0:
        return FinancialStatus.SETTLED
    return FinancialStatus.OVERDUE
