import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from school_admin.core.models import Payment, Student
from school_admin.db.executor import QueryExecutor


@pytest.mark.asyncio
async def test_enroll_student_success(client: AsyncClient, executor: QueryExecutor, school: dict) -> None:
    payload = {
        "first_name": "Mona",
        "last_name": "Ahmed",
        "section_id": str(school["section_id"]),
        "academic_year_id": str(school["academic_year_id"]),
        "parent_phone": "+967700000000",
    }
    response = await client.post("/api/v1/students", json=payload)
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["id"].startswith("STD")
    assert len(data["id"]) == 35

    rows = await executor.execute(select(Student.status, Student.nationality).where(Student.id == data["id"]))
    assert rows[0]["status"] == "active"
    assert rows[0]["nationality"] == "Yemeni"


@pytest.mark.asyncio
async def test_enroll_generates_distinct_ids(enroll) -> None:
    first = await enroll("Omar", "Ali")
    second = await enroll("Omar", "Hassan")
    assert first != second


@pytest.mark.asyncio
async def test_enroll_rejects_duplicate_name_in_section(client: AsyncClient, school: dict, enroll) -> None:
    await enroll("Ali", "Saleh")
    payload = {"first_name": "Ali", "last_name": "Saleh", "section_id": str(school["section_id"])}
    response = await client.post("/api/v1/students", json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == "Student already exists"


@pytest.mark.asyncio
async def test_enroll_rejects_unknown_section(client: AsyncClient, executor: QueryExecutor, school: dict) -> None:
    missing = str(uuid.uuid4())
    payload = {"first_name": "Sara", "last_name": "Noor", "section_id": missing}
    response = await client.post("/api/v1/students", json=payload)
    assert response.status_code == 400
    data = response.json()
    assert data["field"] == "section_id"
    assert data["value"] == missing
    assert await executor.scalar(select(func.count(Student.id))) == 0


@pytest.mark.asyncio
async def test_enroll_rejects_unknown_academic_year(client: AsyncClient, school: dict) -> None:
    payload = {
        "first_name": "Sara",
        "last_name": "Noor",
        "section_id": str(school["section_id"]),
        "academic_year_id": str(uuid.uuid4()),
    }
    response = await client.post("/api/v1/students", json=payload)
    assert response.status_code == 400
    assert response.json()["field"] == "academic_year_id"


@pytest.mark.asyncio
async def test_enroll_lists_missing_fields(client: AsyncClient) -> None:
    response = await client.post("/api/v1/students", json={"first_name": "Sara"})
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Required fields are missing"
    assert "last_name" in data["field"]
    assert "section_id" in data["field"]


@pytest.mark.asyncio
async def test_enroll_rejects_blank_name(client: AsyncClient, school: dict) -> None:
    payload = {"first_name": "  ", "last_name": "Noor", "section_id": str(school["section_id"])}
    response = await client.post("/api/v1/students", json=payload)
    assert response.status_code == 400
    assert response.json()["field"] == "first_name"


@pytest.mark.asyncio
async def test_delete_student_cascades_payments(client: AsyncClient, executor: QueryExecutor, school: dict, enroll) -> None:
    student_id = await enroll()
    response = await client.post(
        "/api/v1/fees",
        json={"student_id": student_id, "fee_type_id": str(school["tuition_id"]), "amount": "1000"},
    )
    assert response.status_code == 201

    response = await client.delete(f"/api/v1/students/{student_id}")
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert await executor.scalar(select(func.count(Payment.id))) == 0


@pytest.mark.asyncio
async def test_delete_missing_student_is_404(client: AsyncClient) -> None:
    response = await client.delete("/api/v1/students/STD0000")
    assert response.status_code == 404
    assert response.json()["error"] == "Student not found"
