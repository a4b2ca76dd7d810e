"""Pydantic schemas for Pokemon and caught Pokemon.

Learn: Pydantic v2 models validate request/response data. Separate
"Create" schemas (input) from "Read" schemas (output) for clean APIs.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class PokemonRead(BaseModel):
    id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}


class CaptureCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CaughtPokemonRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    pokemon_id: uuid.UUID
    created_at: datetime
    pokemon: Optional[PokemonRead] = None

    model_config = {"from_attributes": True}


class CaptureResponse(BaseModel):
    message: str
    data: CaughtPokemonRead


class CaughtList(BaseModel):
    data: list[CaughtPokemonRead]


class PokemonLookup(BaseModel):
    """Upstream PokeAPI payload, passed through untouched."""
    data: dict[str, Any]
