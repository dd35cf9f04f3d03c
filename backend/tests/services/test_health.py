"""Health Probes — liveness always up, readiness tracks the database."""

from user_service.main import app


async def test_liveness_returns_200(client):
    res = await client.get("/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(client, db_manager):
    await db_manager.disconnect()
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_without_manager(client):
    app.state.db_manager = None
    res = await client.get("/health/ready")
    assert res.status_code == 503
