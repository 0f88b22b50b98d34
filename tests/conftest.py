import os
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./school_admin_test.db")

import pytest
from httpx import ASGITransport, AsyncClient

from school_admin.api.v1.students.schemas import StudentCreate
from school_admin.api.v1.students.service import enroll_student
from school_admin.core.models import AcademicYear, FeeType, SchoolClass, Section
from school_admin.db.executor import QueryExecutor
from school_admin.db.session import Base, ConnectionManager
from school_admin.main import create_app


@pytest.fixture()
async def manager(tmp_path) -> AsyncGenerator[ConnectionManager, None]:
    """Started connection manager over a fresh SQLite file with all tables created."""
    mgr = ConnectionManager(f"sqlite+aiosqlite:///{tmp_path / 'school.db'}", retry_delay=0.05)
    await mgr.start()
    async with mgr.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield mgr
    await mgr.stop()


@pytest.fixture()
def executor(manager: ConnectionManager) -> QueryExecutor:
    return QueryExecutor(manager)


@pytest.fixture()
async def client(manager: ConnectionManager) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to an app wired to the test store."""
    app = create_app(manager)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
async def school(executor: QueryExecutor) -> dict:
    """Grade 5 / section A, a current academic year and a mandatory 500000 tuition fee."""

    async def _seed(session):
        grade = SchoolClass(name="Grade 5", level="primary", order_number=5)
        session.add(grade)
        await session.flush()
        section = Section(class_id=grade.id, name="A")
        year = AcademicYear(
            name="2026-2027",
            start_date=date(2026, 9, 1),
            end_date=date(2027, 6, 30),
            is_current=True,
        )
        tuition = FeeType(class_id=grade.id, name="Tuition", amount=Decimal("500000"), is_mandatory=True)
        session.add_all([section, year, tuition])
        await session.flush()
        return {
            "class_id": grade.id,
            "section_id": section.id,
            "academic_year_id": year.id,
            "tuition_id": tuition.id,
        }

    return await executor.execute_in_transaction(_seed)


@pytest.fixture()
def enroll(executor: QueryExecutor, school: dict):
    """Enroll a student in the seeded section and return the new id."""

    async def _enroll(first_name: str = "Ali", last_name: str = "Saleh", **extra) -> str:
        payload = StudentCreate(
            first_name=first_name,
            last_name=last_name,
            section_id=school["section_id"],
            **extra,
        )
        return await enroll_student(executor, payload)

    return _enroll


@pytest.fixture()
def add_fee_type(executor: QueryExecutor, school: dict):
    async def _add(name: str, amount: str, is_mandatory: bool = True):
        async def _insert(session):
            fee_type = FeeType(
                class_id=school["class_id"],
                name=name,
                amount=Decimal(amount),
                is_mandatory=is_mandatory,
            )
            session.add(fee_type)
            await session.flush()
            return fee_type.id

        return await executor.execute_in_transaction(_insert)

    return _add
