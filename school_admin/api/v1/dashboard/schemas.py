from decimal import Decimal

from school_admin.core.schemas import CamelModel


class DashboardStats(CamelModel):
    total_students: int
    attendance_today: int
    absent_today: int
    fees_due: Decimal
