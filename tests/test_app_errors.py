"""Error payloads produced at the HTTP boundary."""

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from school_admin.api.v1.dashboard import service as dashboard_service
from school_admin.db.session import ConnectionManager
from school_admin.main import create_app


@pytest.fixture()
async def unavailable_client(tmp_path) -> AsyncGenerator[AsyncClient, None]:
    """Client over an app whose store never came up."""
    mgr = ConnectionManager(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'school.db'}", retry_delay=10)
    await mgr.start()
    app = create_app(mgr)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    await mgr.stop()


@pytest.mark.asyncio
async def test_report_on_unavailable_store_is_500(unavailable_client: AsyncClient) -> None:
    response = await unavailable_client.get("/api/v1/students/STD123/report")
    assert response.status_code == 500
    assert response.json() == {"error": "store unavailable"}


@pytest.mark.asyncio
async def test_dashboard_on_unavailable_store_is_500(unavailable_client: AsyncClient) -> None:
    response = await unavailable_client.get("/api/v1/dashboard/stats")
    assert response.status_code == 500
    assert response.json() == {"error": "store unavailable"}


@pytest.mark.asyncio
async def test_health_reports_unavailable_store(unavailable_client: AsyncClient) -> None:
    response = await unavailable_client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "store": "unavailable"}


@pytest.mark.asyncio
async def test_unexpected_error_returns_generic_500(manager: ConnectionManager, monkeypatch) -> None:
    async def _boom(executor):
        raise RuntimeError("password=hunter2 host=db01")

    monkeypatch.setattr(dashboard_service, "get_dashboard_stats", _boom)
    app = create_app(manager)
    # the server error middleware re-raises after responding
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/api/v1/dashboard/stats")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "hunter2" not in response.text
