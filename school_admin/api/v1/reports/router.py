"""Student report router."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from school_admin.db.executor import QueryExecutor, get_executor

from . import service
from .schemas import StudentReport

router = APIRouter(prefix="/api/v1/students", tags=["reports"])


@router.get("/{student_id}/report", response_model=StudentReport)
async def get_student_report(
    student_id: str,
    reference_date: Optional[date] = Query(None, alias="date", description="Month to report on (default: today)"),
    executor: QueryExecutor = Depends(get_executor),
) -> StudentReport:
    """Financial and attendance reconciliation for one student."""
    return await service.get_student_report(executor, student_id, reference_date)
