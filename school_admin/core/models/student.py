"""Enrolled student. Payments, discounts and attendance records cascade on delete."""

from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from school_admin.core.enums import StudentStatus
from school_admin.db.session import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(String(40), primary_key=True)  # STD + uuid4 hex, externally visible
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    gender = Column(String(20), nullable=True)
    birth_date = Column(Date, nullable=True)
    nationality = Column(String(50), nullable=True)
    religion = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    emergency_contact = Column(String(50), nullable=True)
    medical_conditions = Column(Text, nullable=True)
    blood_type = Column(String(5), nullable=True)
    parent_guardian_name = Column(String(150), nullable=True)
    parent_guardian_relation = Column(String(50), nullable=True)
    parent_phone = Column(String(30), nullable=True)
    parent_email = Column(String(150), nullable=True)
    parent_occupation = Column(String(100), nullable=True)
    parent_work_address = Column(Text, nullable=True)
    admission_date = Column(Date, nullable=False, default=date.today)
    section_id = Column(Uuid, ForeignKey("sections.id", ondelete="RESTRICT"), nullable=False)
    academic_year_id = Column(Uuid, ForeignKey("academic_years.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(20), nullable=False, default=StudentStatus.ACTIVE.value)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    section = relationship("Section", backref="students")
    academic_year = relationship("AcademicYear")
    payments = relationship("Payment", back_populates="student", cascade="all, delete-orphan", passive_deletes=True)
    discounts = relationship("Discount", back_populates="student", cascade="all, delete-orphan", passive_deletes=True)
    attendance_records = relationship(
        "AttendanceRecord",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
