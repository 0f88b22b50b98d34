from fastapi import APIRouter, Depends, status

from school_admin.db.executor import QueryExecutor, get_executor

from . import service
from .schemas import DiscountCreate, DiscountResponse

router = APIRouter(prefix="/api/v1/discounts", tags=["discounts"])


@router.post("", response_model=DiscountResponse, status_code=status.HTTP_201_CREATED)
async def create_discount(
    payload: DiscountCreate,
    executor: QueryExecutor = Depends(get_executor),
) -> DiscountResponse:
    return await service.create_discount(executor, payload)
