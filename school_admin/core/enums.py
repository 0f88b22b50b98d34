from enum import Enum


class StudentStatus(str, Enum):
    ACTIVE = "active"
    WITHDRAWN = "withdrawn"
    GRADUATED = "graduated"
    TRANSFERRED = "transferred"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class FinancialStatus(str, Enum):
    SETTLED = "settled"
    OVERDUE = "overdue"
