"""Attendance upsert by (student, date), day view and deletion."""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import NotFoundError, ServiceError
from school_admin.core.models import AttendanceRecord, SchoolClass, Section, Student
from school_admin.core.validation import ensure_exists, require_fields
from school_admin.db.executor import QueryExecutor

from .schemas import AttendanceDayRecord, AttendanceUpsert

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def upsert_attendance(executor: QueryExecutor, payload: AttendanceUpsert) -> bool:
    """
    Insert or overwrite the record for (student_id, date) in a single
    INSERT ... ON CONFLICT DO UPDATE, so concurrent submissions for the same
    key all succeed and the last one to commit wins. Returns True when a new
    record was inserted.
    """
    require_fields(payload.model_dump(), ("student_id", "date", "status"))

    async def _upsert(session: AsyncSession) -> bool:
        await ensure_exists(session, Student, payload.student_id, "student_id", "student")
        insert = _UPSERT_DIALECTS.get(session.bind.dialect.name)
        if insert is None:
            raise ServiceError(f"Attendance upsert is not supported on {session.bind.dialect.name}")

        new_id = uuid4()
        values = {
            "status": payload.status.value,
            "time_in": payload.time_in,
            "time_out": payload.time_out,
            "notes": payload.notes,
        }
        stmt = insert(AttendanceRecord).values(id=new_id, student_id=payload.student_id, date=payload.date, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["student_id", "date"],
            set_=values,
        ).returning(AttendanceRecord.id)
        stored_id = (await session.execute(stmt)).scalar_one()
        # on conflict the existing row keeps its id
        return stored_id == new_id

    created = await executor.execute_in_transaction(_upsert)
    logger.info(
        "%s attendance for student %s on %s (%s)",
        "Recorded" if created else "Updated",
        payload.student_id,
        payload.date,
        payload.status.value,
    )
    return created


async def list_attendance_for_day(executor: QueryExecutor, att_date: Optional[date] = None) -> List[AttendanceDayRecord]:
    rows = await executor.execute(
        select(
            AttendanceRecord.id,
            AttendanceRecord.student_id,
            Student.first_name,
            Student.last_name,
            SchoolClass.name.label("grade"),
            Section.name.label("section"),
            AttendanceRecord.status,
            AttendanceRecord.time_in,
            AttendanceRecord.time_out,
            AttendanceRecord.notes,
        )
        .join(Student, AttendanceRecord.student_id == Student.id)
        .join(Section, Student.section_id == Section.id)
        .join(SchoolClass, Section.class_id == SchoolClass.id)
        .where(AttendanceRecord.date == (att_date or date.today()))
        .order_by(SchoolClass.order_number, Section.name, Student.first_name)
    )
    return [
        AttendanceDayRecord(
            id=r["id"],
            student_id=r["student_id"],
            name=f"{r['first_name']} {r['last_name']}",
            grade=r["grade"],
            section=r["section"],
            status=r["status"],
            time_in=r["time_in"],
            time_out=r["time_out"],
            notes=r["notes"],
        )
        for r in rows
    ]


async def delete_attendance(executor: QueryExecutor, record_id: UUID) -> None:
    async def _delete(session: AsyncSession) -> int:
        result = await session.execute(delete(AttendanceRecord).where(AttendanceRecord.id == record_id))
        return result.rowcount

    if not await executor.execute_in_transaction(_delete):
        raise NotFoundError("Attendance record not found", field="attendance_id", value=str(record_id))
    logger.info("Deleted attendance record %s", record_id)
