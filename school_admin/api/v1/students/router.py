"""Student write endpoints: enrollment and removal."""

from fastapi import APIRouter, Depends, status

from school_admin.core.schemas import MessageResponse
from school_admin.db.executor import QueryExecutor, get_executor

from . import service
from .schemas import StudentCreate, StudentCreatedResponse

router = APIRouter(prefix="/api/v1/students", tags=["students"])


@router.post("", response_model=StudentCreatedResponse, status_code=status.HTTP_201_CREATED)
async def enroll_student(
    payload: StudentCreate,
    executor: QueryExecutor = Depends(get_executor),
) -> StudentCreatedResponse:
    student_id = await service.enroll_student(executor, payload)
    return StudentCreatedResponse(id=student_id)


@router.delete("/{student_id}", response_model=MessageResponse)
async def delete_student(
    student_id: str,
    executor: QueryExecutor = Depends(get_executor),
) -> MessageResponse:
    await service.delete_student(executor, student_id)
    return MessageResponse(message="Student deleted successfully")
