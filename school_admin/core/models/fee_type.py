import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from school_admin.db.session import Base


class FeeType(Base):
    """Charge category scoped to a class. No update/delete path once payments reference it."""

    __tablename__ = "fee_types"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    class_id = Column(Uuid, ForeignKey("classes.id", ondelete="RESTRICT"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    is_mandatory = Column(Boolean, nullable=False, default=True)
    description = Column(Text, nullable=True)

    school_class = relationship("SchoolClass", backref="fee_types")
