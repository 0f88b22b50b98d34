import uuid
from datetime import date

from sqlalchemy import Column, Date, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from school_admin.db.session import Base


class Discount(Base):
    """
    Approved discount. Append-only. `amount` is always the resolved value: a
    percentage discount is converted against the class fee total when created,
    and `percentage` is kept for reference only.
    """

    __tablename__ = "discounts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(String(40), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    percentage = Column(Numeric(5, 2), nullable=True)
    reason = Column(Text, nullable=False)
    academic_year_id = Column(Uuid, ForeignKey("academic_years.id", ondelete="SET NULL"), nullable=True)
    approved_by = Column(String(100), nullable=False)
    approval_date = Column(Date, nullable=False, default=date.today)

    student = relationship("Student", back_populates="discounts")
