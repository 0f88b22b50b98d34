"""Attendance API router."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from school_admin.core.schemas import MessageResponse
from school_admin.db.executor import QueryExecutor, get_executor

from . import service
from .schemas import AttendanceDayRecord, AttendanceUpsert, AttendanceUpsertResponse

router = APIRouter(prefix="/api/v1/attendance", tags=["attendance"])


@router.post("", response_model=AttendanceUpsertResponse, status_code=status.HTTP_201_CREATED)
async def upsert_attendance(
    payload: AttendanceUpsert,
    executor: QueryExecutor = Depends(get_executor),
) -> AttendanceUpsertResponse:
    """One record per student per day; a second submission overwrites the first."""
    created = await service.upsert_attendance(executor, payload)
    return AttendanceUpsertResponse(message="Attendance saved", created=created)


@router.get("", response_model=List[AttendanceDayRecord])
async def list_attendance(
    att_date: Optional[date] = Query(None, alias="date", description="Attendance date (default: today)"),
    executor: QueryExecutor = Depends(get_executor),
) -> List[AttendanceDayRecord]:
    return await service.list_attendance_for_day(executor, att_date)


@router.delete("/{record_id}", response_model=MessageResponse)
async def delete_attendance(
    record_id: UUID,
    executor: QueryExecutor = Depends(get_executor),
) -> MessageResponse:
    await service.delete_attendance(executor, record_id)
    return MessageResponse(message="Attendance record deleted successfully")
