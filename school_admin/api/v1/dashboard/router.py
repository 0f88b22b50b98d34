from fastapi import APIRouter, Depends

from school_admin.db.executor import QueryExecutor, get_executor

from . import service
from .schemas import DashboardStats

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(executor: QueryExecutor = Depends(get_executor)) -> DashboardStats:
    return await service.get_dashboard_stats(executor)
