"""Daily attendance. One row per (student_id, date); writes go through the upsert."""

import uuid

from sqlalchemy import Column, Date, ForeignKey, String, Text, Time, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from school_admin.db.session import Base


class AttendanceRecord(Base):
    __tablename__ = "attendance"
    __table_args__ = (UniqueConstraint("student_id", "date", name="uq_attendance_student_date"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(String(40), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False)  # present, absent, late
    time_in = Column(Time, nullable=True)
    time_out = Column(Time, nullable=True)
    notes = Column(Text, nullable=True)

    student = relationship("Student", back_populates="attendance_records")
