"""
Integration tests for application wiring: health check and error handling
"""
import pytest
from httpx import ASGITransport, AsyncClient

from todo_service.depends import get_unit_of_work


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_unexpected_error_returns_generic_500(app):
    async def broken_unit_of_work():
        raise RuntimeError("store exploded")
        yield

    app.dependency_overrides[get_unit_of_work] = broken_unit_of_work

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.post("/api/auth/forgot-password", json={"email": "a@b.com"})

    assert response.status_code == 500
    assert response.json()["message"] == "An error occurred. Please try again."
    assert "exploded" not in response.text


@pytest.mark.asyncio
async def test_lifespan_starts_and_stops_cleanup_worker(app):
    worker = app.state.cleanup_worker

    async with app.router.lifespan_context(app):
        assert worker.is_running

    assert not worker.is_running
