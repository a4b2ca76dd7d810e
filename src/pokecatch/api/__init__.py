"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter. Everything under /protected passes the token
gate before its handler runs; handlers that need the identity declare
get_current_user again and FastAPI reuses the cached result.
"""

from fastapi import APIRouter, Depends

from pokecatch.api.auth import router as auth_router
from pokecatch.api.collection import router as collection_router
from pokecatch.api.health import router as health_router
from pokecatch.api.pokemon import router as pokemon_router
from pokecatch.auth.dependencies import get_current_user

_auth = [Depends(get_current_user)]

api_router = APIRouter()

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(pokemon_router, tags=["pokemon"])

# Protected routes: require a valid bearer token
api_router.include_router(
    collection_router, prefix="/protected", tags=["collection"], dependencies=_auth
)
