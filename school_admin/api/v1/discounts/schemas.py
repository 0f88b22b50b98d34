from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class DiscountCreate(BaseModel):
    """Either amount or percentage; amount wins when both are given."""

    student_id: str
    amount: Optional[Decimal] = Field(None, gt=0)
    percentage: Optional[Decimal] = Field(None, gt=0, le=100)
    reason: str
    approved_by: str
    academic_year_id: Optional[UUID] = None


class DiscountResponse(BaseModel):
    id: UUID
    student_id: str
    amount: Decimal
    percentage: Optional[Decimal] = None
    reason: str
    approved_by: str
    approval_date: date

    class Config:
        from_attributes = True
