"""Student enrollment and removal. Each write runs in a single transaction."""

import logging
import uuid
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.enums import StudentStatus
from school_admin.core.exceptions import NotFoundError, ValidationError
from school_admin.core.models import AcademicYear, Section, Student
from school_admin.core.validation import ensure_exists, require_fields
from school_admin.db.executor import QueryExecutor

from .schemas import StudentCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "section_id")
DEFAULT_NATIONALITY = "Yemeni"
DEFAULT_RELIGION = "Islam"


def generate_student_id() -> str:
    return f"STD{uuid.uuid4().hex.upper()}"


async def enroll_student(executor: QueryExecutor, payload: StudentCreate) -> str:
    """
    Validate and insert a student in one transaction. Duplicate
    (first_name, last_name, section) and missing section / academic year
    abort with a ValidationError naming the field.
    """
    require_fields(payload.model_dump(), REQUIRED_FIELDS)
    first_name = payload.first_name.strip()
    last_name = payload.last_name.strip()

    async def _enroll(session: AsyncSession) -> str:
        existing = (
            await session.execute(
                select(Student.id).where(
                    Student.first_name == first_name,
                    Student.last_name == last_name,
                    Student.section_id == payload.section_id,
                )
            )
        ).first()
        if existing is not None:
            raise ValidationError(
                "Student already exists",
                field="first_name, last_name, section_id",
                details="A student with the same name already exists in this section",
            )
        await ensure_exists(session, Section, payload.section_id, "section_id", "section")
        if payload.academic_year_id is not None:
            await ensure_exists(session, AcademicYear, payload.academic_year_id, "academic_year_id", "academic year")

        student = Student(
            id=generate_student_id(),
            first_name=first_name,
            last_name=last_name,
            gender=payload.gender,
            birth_date=payload.birth_date,
            nationality=payload.nationality or DEFAULT_NATIONALITY,
            religion=payload.religion or DEFAULT_RELIGION,
            address=payload.address,
            emergency_contact=payload.emergency_contact,
            medical_conditions=payload.medical_conditions,
            blood_type=payload.blood_type,
            parent_guardian_name=payload.parent_guardian_name,
            parent_guardian_relation=payload.parent_guardian_relation,
            parent_phone=payload.parent_phone,
            parent_email=payload.parent_email,
            parent_occupation=payload.parent_occupation,
            parent_work_address=payload.parent_work_address,
            admission_date=payload.admission_date or date.today(),
            section_id=payload.section_id,
            academic_year_id=payload.academic_year_id,
            status=StudentStatus.ACTIVE.value,
        )
        session.add(student)
        await session.flush()
        return student.id

    student_id = await executor.execute_in_transaction(_enroll)
    logger.info("Enrolled student %s in section %s", student_id, payload.section_id)
    return student_id


async def delete_student(executor: QueryExecutor, student_id: str) -> None:
    """Remove a student; payments, discounts and attendance go with it (FK cascade)."""

    async def _delete(session: AsyncSession) -> int:
        result = await session.execute(delete(Student).where(Student.id == student_id))
        return result.rowcount

    removed = await executor.execute_in_transaction(_delete)
    if not removed:
        raise NotFoundError("Student not found", field="student_id", value=student_id)
    logger.info("Removed student %s", student_id)
