"""CollectionService without HTTP."""

import uuid

import pytest

from pokecatch.db.models import User
from pokecatch.services.collection_service import CollectionService


async def _user(db_session) -> User:
    user = User(email=f"svc-{uuid.uuid4().hex[:8]}@example.com", password_hash="x")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.mark.asyncio
async def test_get_or_create_is_idempotent(db_session):
    svc = CollectionService(db_session)
    p1 = await svc.get_or_create_pokemon("psyduck")
    p2 = await svc.get_or_create_pokemon("psyduck")
    assert p1.id == p2.id


@pytest.mark.asyncio
async def test_release_reports_rows_deleted(db_session):
    svc = CollectionService(db_session)
    owner = await _user(db_session)
    stranger = await _user(db_session)
    caught = await svc.capture(owner.id, "jigglypuff")

    assert await svc.release(stranger.id, caught.id) == 0
    assert await svc.release(owner.id, caught.id) == 1
    assert await svc.release(owner.id, caught.id) == 0


@pytest.mark.asyncio
async def test_list_caught_oldest_first_with_pokemon_loaded(db_session):
    svc = CollectionService(db_session)
    owner = await _user(db_session)
    for name in ("charmander", "charmeleon", "charizard"):
        await svc.capture(owner.id, name)

    caught = await svc.list_caught(owner.id)
    assert [c.pokemon.name for c in caught] == ["charmander", "charmeleon", "charizard"]
    assert all(c.user_id == owner.id for c in caught)
