import uuid

from sqlalchemy import Column, Integer, String, Uuid

from school_admin.db.session import Base


class SchoolClass(Base):
    """Grade level (e.g. Grade 5). Fee types are scoped to a class."""

    __tablename__ = "classes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    level = Column(String(50), nullable=True)
    order_number = Column(Integer, nullable=True)
