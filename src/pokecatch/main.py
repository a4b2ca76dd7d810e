"""FastAPI application factory.

Learn: App factory pattern: create_app() returns a configured FastAPI
instance. Everything process-wide (engine, session factory, token codec,
PokeAPI client, Redis) is built from one Settings object and stored on
app.state; dependencies read it from there. Lifespan manages the parts
that need a running event loop (Redis, optional table creation) and
closes everything on shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

import redis.asyncio as aioredis
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokecatch import __version__
from pokecatch.api import api_router
from pokecatch.auth.jwt import TokenCodec
from pokecatch.config import Settings, settings as default_settings
from pokecatch.db.engine import build_engine, build_session_factory, create_tables
from pokecatch.errors import register_exception_handlers
from pokecatch.middleware.rate_limit import RateLimitMiddleware
from pokecatch.middleware.request_id import RequestIdMiddleware
from pokecatch.services.pokeapi import PokeApiClient

logger = structlog.get_logger()


async def connect_redis(url: str) -> Optional[aioredis.Redis]:
    """Connect to Redis, or return None if it is unreachable."""
    client = aioredis.from_url(url, encoding="utf-8", decode_responses=True)
    try:
        await client.ping()
    except Exception as e:
        logger.warning("pokecatch.redis_unavailable", error=str(e))
        await client.aclose()
        return None
    return client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    cfg: Settings = app.state.settings
    logger.info(
        "pokecatch.starting",
        version=__version__,
        environment=cfg.environment,
        port=cfg.port,
    )

    if cfg.create_tables_on_startup:
        await create_tables(app.state.engine)
        logger.info("pokecatch.tables_created")

    if cfg.rate_limit_enabled:
        app.state.redis = await connect_redis(cfg.redis_url)
        if app.state.redis is not None:
            logger.info("pokecatch.redis_connected", url=cfg.redis_url)

    yield

    logger.info("pokecatch.shutdown")
    if app.state.redis is not None:
        await app.state.redis.aclose()
        app.state.redis = None
    await app.state.pokeapi.aclose()
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    cfg = settings or default_settings

    app = FastAPI(
        title="PokeCatch",
        description="Catch Pokemon, keep a collection. Accounts, PokeAPI lookup, ownership-scoped storage",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.engine = build_engine(cfg)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.tokens = TokenCodec.from_settings(cfg)
    app.state.pokeapi = PokeApiClient.from_settings(cfg)
    app.state.redis = None

    register_exception_handlers(app)

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → RateLimit → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        limit=cfg.rate_limit_requests,
        window_seconds=cfg.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: pokecatch.main:app)
app = create_app()
