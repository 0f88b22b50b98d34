from school_admin.core.models.academic_year import AcademicYear
from school_admin.core.models.class_model import SchoolClass
from school_admin.core.models.section_model import Section
from school_admin.core.models.student import Student
from school_admin.core.models.fee_type import FeeType
from school_admin.core.models.payment import Payment
from school_admin.core.models.discount import Discount
from school_admin.core.models.attendance_record import AttendanceRecord

__all__ = [
    "AcademicYear",
    "AttendanceRecord",
    "Discount",
    "FeeType",
    "Payment",
    "SchoolClass",
    "Section",
    "Student",
]
