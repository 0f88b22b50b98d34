import uuid
from decimal import Decimal

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_record_payment(client: AsyncClient, school: dict, enroll) -> None:
    student_id = await enroll()
    response = await client.post(
        "/api/v1/fees",
        json={
            "student_id": student_id,
            "fee_type_id": str(school["tuition_id"]),
            "amount": "300000",
            "payment_method": "Card",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert Decimal(data["amount"]) == Decimal("300000")
    assert data["payment_method"] == "card"
    assert data["payment_date"]


@pytest.mark.asyncio
async def test_payment_requires_existing_fee_type(client: AsyncClient, enroll) -> None:
    student_id = await enroll()
    response = await client.post(
        "/api/v1/fees",
        json={"student_id": student_id, "fee_type_id": str(uuid.uuid4()), "amount": "10"},
    )
    assert response.status_code == 400
    assert response.json()["field"] == "fee_type_id"


@pytest.mark.asyncio
async def test_payment_requires_existing_student(client: AsyncClient, school: dict) -> None:
    response = await client.post(
        "/api/v1/fees",
        json={"student_id": "STD404", "fee_type_id": str(school["tuition_id"]), "amount": "10"},
    )
    assert response.status_code == 400
    data = response.json()
    assert data["field"] == "student_id"
    assert data["value"] == "STD404"


@pytest.mark.asyncio
async def test_payment_amount_must_be_positive(client: AsyncClient, school: dict, enroll) -> None:
    student_id = await enroll()
    response = await client.post(
        "/api/v1/fees",
        json={"student_id": student_id, "fee_type_id": str(school["tuition_id"]), "amount": "0"},
    )
    assert response.status_code == 400
    assert response.json()["field"] == "amount"


@pytest.mark.asyncio
async def test_delete_payment(client: AsyncClient, school: dict, enroll) -> None:
    student_id = await enroll()
    created = await client.post(
        "/api/v1/fees",
        json={"student_id": student_id, "fee_type_id": str(school["tuition_id"]), "amount": "10"},
    )
    payment_id = created.json()["id"]

    response = await client.delete(f"/api/v1/fees/{payment_id}")
    assert response.status_code == 200
    response = await client.delete(f"/api/v1/fees/{payment_id}")
    assert response.status_code == 404
