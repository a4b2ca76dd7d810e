"""Pokemon lookup: upstream failures all collapse into one 404."""

import httpx
import pytest

from pokecatch.errors import PokemonNotFound
from pokecatch.services.pokeapi import PokeApiClient

NOT_FOUND = {"message": "Pokemon not found"}


@pytest.mark.asyncio
async def test_lookup_passes_upstream_data_through(client):
    r = await client.get("/pokemon/pikachu")
    assert r.status_code == 200
    assert r.json() == {"data": {"name": "pikachu", "id": 25}}


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["missingno", "boom", "garbage", "listy", "crash"])
async def test_upstream_failures_are_uniform_404(client, name):
    r = await client.get(f"/pokemon/{name}")
    assert r.status_code == 404
    assert r.json() == NOT_FOUND


@pytest.mark.asyncio
async def test_client_requests_expected_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"name": "mr-mime"})

    api = PokeApiClient("https://pokeapi.test/api/v2/", transport=httpx.MockTransport(handler))
    try:
        assert await api.get_pokemon("mr mime") == {"name": "mr-mime"}
    finally:
        await api.aclose()
    assert seen == ["https://pokeapi.test/api/v2/pokemon/mr%20mime"]


@pytest.mark.asyncio
async def test_timeout_is_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    api = PokeApiClient("https://pokeapi.test/api/v2", transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(PokemonNotFound):
            await api.get_pokemon("slowbro")
    finally:
        await api.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["..", ".", "..."])
async def test_dot_only_names_never_reach_upstream(name):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"count": 1302, "results": []})

    api = PokeApiClient("https://pokeapi.test/api/v2", transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(PokemonNotFound):
            await api.get_pokemon(name)
    finally:
        await api.aclose()
    assert seen == []


@pytest.mark.asyncio
async def test_dot_names_with_letters_are_looked_up():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"name": "mr.mime"})

    api = PokeApiClient("https://pokeapi.test/api/v2", transport=httpx.MockTransport(handler))
    try:
        assert await api.get_pokemon("mr.mime") == {"name": "mr.mime"}
    finally:
        await api.aclose()
