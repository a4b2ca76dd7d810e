"""Health check endpoint."""

import pytest

from pokecatch import __version__
from pokecatch.config import Settings
from pokecatch.db.engine import build_engine


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["database"] == "ok"
    assert body["redis"] == "disabled"
    assert body["version"] == __version__


@pytest.mark.asyncio
async def test_health_degraded_without_database(app, client):
    working = app.state.engine
    app.state.engine = build_engine(
        Settings(
            database_url="sqlite+aiosqlite:////nonexistent-dir/unreachable.db",
            environment="test",
            jwt_secret="unused",
        )
    )
    try:
        r = await client.get("/health")
    finally:
        await app.state.engine.dispose()
        app.state.engine = working

    assert r.status_code == 200
    assert r.json()["status"] == "degraded"
    assert r.json()["database"].startswith("error")
