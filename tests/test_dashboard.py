from datetime import date, timedelta
from decimal import Decimal

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_empty_school_reports_zeros(client: AsyncClient) -> None:
    response = await client.get("/api/v1/dashboard/stats")
    assert response.status_code == 200
    data = response.json()
    assert data["totalStudents"] == 0
    assert data["attendanceToday"] == 0
    assert data["absentToday"] == 0
    assert Decimal(data["feesDue"]) == 0


@pytest.mark.asyncio
async def test_dashboard_counters(client: AsyncClient, school: dict, enroll, add_fee_type) -> None:
    bus_id = await add_fee_type("Bus", "100000", is_mandatory=False)
    ali = await enroll("Ali", "Saleh")
    huda = await enroll("Huda", "Saleh")
    await enroll("Omar", "Saleh")
    today = date.today().isoformat()

    await client.post("/api/v1/attendance", json={"student_id": ali, "date": today, "status": "present"})
    await client.post("/api/v1/attendance", json={"student_id": huda, "date": today, "status": "absent"})
    last_year = (date.today() - timedelta(days=400)).isoformat()
    await client.post("/api/v1/attendance", json={"student_id": huda, "date": last_year, "status": "present"})
    for fee_type_id, amount in ((school["tuition_id"], "300000"), (bus_id, "50000")):
        await client.post(
            "/api/v1/fees",
            json={"student_id": ali, "fee_type_id": str(fee_type_id), "amount": amount},
        )

    data = (await client.get("/api/v1/dashboard/stats")).json()
    assert data["totalStudents"] == 3
    assert data["attendanceToday"] == 1
    assert data["absentToday"] == 1
    # mandatory fee amounts minus payments against mandatory fees, school-wide
    assert Decimal(data["feesDue"]) == Decimal("200000")


@pytest.mark.asyncio
async def test_health_reports_store_state(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.json() == {"status": "ok", "store": "available"}
