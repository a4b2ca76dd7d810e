"""Test fixtures: a fresh app and database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own SQLite file (sqlite+aiosqlite) under tmp_path,
   with tables created from the ORM metadata. Nothing leaks between tests.
2. create_app() takes an explicit Settings, so the signing secret and the
   bcrypt cost (4, fast) are test values, not process globals.
3. PokeAPI is swapped for an httpx.MockTransport; no network access.
4. Rate limiting is off unless a test turns it on with a fake Redis.
"""

import uuid

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from pokecatch.config import Settings
from pokecatch.db.engine import create_tables
from pokecatch.main import create_app
from pokecatch.services.pokeapi import PokeApiClient

TEST_SECRET = "test-secret-for-signing-tokens-0123456789"


def pokeapi_handler(request: httpx.Request) -> httpx.Response:
    """Fake PokeAPI: a couple of known species and a few failure modes."""
    name = request.url.path.rsplit("/", 1)[-1]
    if name in ("pikachu", "bulbasaur"):
        return httpx.Response(200, json={"name": name, "id": 25 if name == "pikachu" else 1})
    if name == "boom":
        raise httpx.ConnectError("upstream down", request=request)
    if name == "garbage":
        return httpx.Response(200, text="<html>not json</html>")
    if name == "listy":
        return httpx.Response(200, json=["not", "an", "object"])
    if name == "crash":
        return httpx.Response(500, text="Internal Server Error")
    return httpx.Response(404, text="Not Found")


@pytest.fixture()
def test_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_SECRET,
        environment="test",
        bcrypt_rounds=4,
        rate_limit_enabled=False,
    )


@pytest_asyncio.fixture()
async def app(test_settings):
    app = create_app(test_settings)
    await app.state.pokeapi.aclose()
    app.state.pokeapi = PokeApiClient(
        "https://pokeapi.test/api/v2",
        transport=httpx.MockTransport(pokeapi_handler),
    )
    await create_tables(app.state.engine)

    yield app

    await app.state.pokeapi.aclose()
    await app.state.engine.dispose()


@pytest_asyncio.fixture()
async def client(app):
    """HTTP client that talks to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture()
async def db_session(app):
    """A separate session for inspecting what the API wrote."""
    async with app.state.session_factory() as session:
        yield session


@pytest.fixture()
def tokens(app):
    return app.state.tokens


def unique_email(prefix: str = "trainer") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture()
def login_as(client):
    """Register + login a fresh user; returns (auth headers, email)."""

    async def _login_as(prefix: str = "trainer", password: str = "pikapika"):
        email = unique_email(prefix)
        r = await client.post("/register", json={"email": email, "password": password})
        assert r.status_code == 200
        r = await client.post("/login", json={"email": email, "password": password})
        assert r.status_code == 200
        return {"Authorization": f"Bearer {r.json()['token']}"}, email

    return _login_as
