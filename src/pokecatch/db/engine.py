"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode: create_async_engine for connection pooling,
AsyncSession for per-request database access, dependency injection via FastAPI.

The engine is built once by create_app() and parked on app.state, so a test
can hand the app a throwaway SQLite database without touching globals.
"""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pokecatch.config import Settings
from pokecatch.db.models import Base


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the engine for settings.database_url.

    Connection pool: 5 + up to 15 overflow on PostgreSQL.
    SQLite (tests, local hacking) keeps SQLAlchemy's default pool.
    echo=True in debug to see SQL queries.
    """
    url = make_url(settings.database_url)
    kwargs: dict = {"echo": settings.debug}
    if url.get_backend_name() != "sqlite":
        kwargs.update(pool_size=5, max_overflow=15, pool_pre_ping=True)
    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory: each request gets its own session."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create every table that does not exist yet (no migrations)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency. Yields a session per request, auto-closes."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
