from datetime import date, time
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from school_admin.core.enums import AttendanceStatus


class AttendanceUpsert(BaseModel):
    """Record (or overwrite) one student's attendance for a date."""

    student_id: str
    date: date
    status: AttendanceStatus = Field(..., description="present, absent, late")
    time_in: Optional[time] = None
    time_out: Optional[time] = None
    notes: Optional[str] = None


class AttendanceUpsertResponse(BaseModel):
    message: str
    success: bool = True
    created: bool


class AttendanceDayRecord(BaseModel):
    """Single row of the day view."""

    id: UUID
    student_id: str
    name: str
    grade: str
    section: str
    status: str
    time_in: Optional[time] = None
    time_out: Optional[time] = None
    notes: Optional[str] = None
