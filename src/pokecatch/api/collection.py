"""Collection API: the caller's own caught Pokemon.

Learn: These routes live under /protected and are only reachable after
the auth gate (see api/__init__.py). Each handler pulls the identity the
gate resolved and passes its user_id to CollectionService, which scopes
every query by it.
"""

import uuid

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from pokecatch.auth.dependencies import CurrentIdentity, get_current_user
from pokecatch.db.engine import get_db
from pokecatch.schemas.auth import MessageResponse
from pokecatch.schemas.collection import (
    CaptureCreate,
    CaptureResponse,
    CaughtList,
    CaughtPokemonRead,
)
from pokecatch.services.collection_service import CollectionService

router = APIRouter()


def get_collection_service(db: AsyncSession = Depends(get_db)) -> CollectionService:
    return CollectionService(db)


async def capture_body(
    request: Request,
    identity: CurrentIdentity = Depends(get_current_user),
) -> CaptureCreate:
    """Parse the capture body only once the gate has accepted the token.

    Learn: A declared body parameter would be parsed before any
    dependency runs, so an unauthenticated request with broken JSON
    would get a 422 instead of the gate's 401.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
        )
    try:
        return CaptureCreate.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)]
        )


@router.post(
    "/capture",
    response_model=CaptureResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": CaptureCreate.model_json_schema()}},
        }
    },
)
async def capture(
    body: CaptureCreate = Depends(capture_body),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: CollectionService = Depends(get_collection_service),
):
    """Catch a Pokemon by species name."""
    caught = await svc.capture(identity.user_id, body.name)
    return {
        "message": "Pokemon caught successfully",
        "data": CaughtPokemonRead.model_validate(caught),
    }


@router.delete("/release/{caught_id}", response_model=MessageResponse)
async def release(
    caught_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: CollectionService = Depends(get_collection_service),
):
    """Release one of your captures.

    Unknown ids, other users' ids and ids that are not even UUIDs all
    get the same success response.
    """
    try:
        parsed = uuid.UUID(caught_id)
    except ValueError:
        parsed = None
    if parsed is not None:
        await svc.release(identity.user_id, parsed)
    return {"message": "Pokemon released successfully"}


@router.get("/caught", response_model=CaughtList)
async def list_caught(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: CollectionService = Depends(get_collection_service),
):
    """List your captures with species info, oldest first."""
    caught = await svc.list_caught(identity.user_id)
    return {"data": [CaughtPokemonRead.model_validate(c) for c in caught]}
