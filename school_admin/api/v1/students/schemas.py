from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class StudentCreate(BaseModel):
    """Enrollment payload. first_name, last_name and section_id are required."""

    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    section_id: UUID
    academic_year_id: Optional[UUID] = None
    gender: Optional[str] = None
    birth_date: Optional[date] = None
    nationality: Optional[str] = None
    religion: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_conditions: Optional[str] = None
    blood_type: Optional[str] = None
    parent_guardian_name: Optional[str] = None
    parent_guardian_relation: Optional[str] = None
    parent_phone: Optional[str] = None
    parent_email: Optional[str] = None
    parent_occupation: Optional[str] = None
    parent_work_address: Optional[str] = None
    admission_date: Optional[date] = None


class StudentCreatedResponse(BaseModel):
    id: str
    message: str = "Student added successfully"
    success: bool = True
