"""Payment schemas."""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class PaymentCreate(BaseModel):
    student_id: str
    fee_type_id: UUID
    amount: Decimal = Field(..., gt=0)
    payment_date: Optional[date] = None
    payment_method: Optional[str] = Field(None, description="cash, card, bank, ...")
    receipt_number: Optional[str] = None
    notes: Optional[str] = None


class PaymentResponse(BaseModel):
    id: UUID
    student_id: str
    fee_type_id: UUID
    amount: Decimal
    payment_date: date
    payment_method: str
    receipt_number: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True
