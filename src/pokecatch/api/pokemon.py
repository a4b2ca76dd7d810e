"""Pokemon lookup: proxies PokeAPI.

Open route; any upstream failure is a plain 404.
"""

from fastapi import APIRouter, Depends, Request

from pokecatch.schemas.collection import PokemonLookup
from pokecatch.services.pokeapi import PokeApiClient

router = APIRouter()


def get_pokeapi(request: Request) -> PokeApiClient:
    return request.app.state.pokeapi


@router.get("/pokemon/{name}", response_model=PokemonLookup)
async def get_pokemon(name: str, pokeapi: PokeApiClient = Depends(get_pokeapi)):
    """Fetch species metadata from PokeAPI."""
    return {"data": await pokeapi.get_pokemon(name)}
