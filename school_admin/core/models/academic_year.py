import uuid

from sqlalchemy import Boolean, Column, Date, String, Uuid

from school_admin.db.session import Base


class AcademicYear(Base):
    """
    Academic year. At most one should be is_current = true; the store does not
    enforce this, readers treat it as a soft invariant.
    """

    __tablename__ = "academic_years"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False)  # e.g. "2025-2026"
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_current = Column(Boolean, nullable=False, default=False)
