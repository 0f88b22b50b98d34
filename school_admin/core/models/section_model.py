"""Sections (e.g. A, B, C) under a class. A student belongs to exactly one section."""
import uuid

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from school_admin.db.session import Base


class Section(Base):
    __tablename__ = "sections"
    __table_args__ = (UniqueConstraint("class_id", "name", name="uq_section_class_name"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    class_id = Column(Uuid, ForeignKey("classes.id", ondelete="RESTRICT"), nullable=False)
    name = Column(String(50), nullable=False)

    school_class = relationship("SchoolClass", backref="sections", foreign_keys=[class_id])
