"""Fees router: record and delete payments."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from school_admin.core.schemas import MessageResponse
from school_admin.db.executor import QueryExecutor, get_executor

from . import service
from .schemas import PaymentCreate, PaymentResponse

router = APIRouter(prefix="/api/v1/fees", tags=["fees"])


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def record_payment(
    payload: PaymentCreate,
    executor: QueryExecutor = Depends(get_executor),
) -> PaymentResponse:
    return await service.record_payment(executor, payload)


@router.delete("/{payment_id}", response_model=MessageResponse)
async def delete_payment(
    payment_id: UUID,
    executor: QueryExecutor = Depends(get_executor),
) -> MessageResponse:
    await service.delete_payment(executor, payment_id)
    return MessageResponse(message="Payment deleted successfully")
