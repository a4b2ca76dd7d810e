"""Collection service: capture, release and list a user's Pokemon.

Learn: Every method takes the authenticated user_id and puts it in the
WHERE clause. A CaughtPokemon id on its own never selects or deletes
anything; it has to belong to the caller.

Pokemon rows are shared and created on first capture with
INSERT ... ON CONFLICT (name) DO NOTHING followed by a SELECT, so two
players catching a brand-new species at the same moment still end up
pointing at one row.
"""

import uuid

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pokecatch.db.models import CaughtPokemon, Pokemon

logger = structlog.get_logger()


def _insert_for(dialect_name: str):
    """Dialect insert() that supports on_conflict_do_nothing."""
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise RuntimeError(f"Unsupported database dialect: {dialect_name}")
    return insert


class CollectionService:
    """Ownership-scoped access to caught Pokemon."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_or_create_pokemon(self, name: str) -> Pokemon:
        insert = _insert_for(self.db.get_bind().dialect.name)
        await self.db.execute(
            insert(Pokemon)
            .values(name=name)
            .on_conflict_do_nothing(index_elements=[Pokemon.name])
        )
        result = await self.db.execute(select(Pokemon).where(Pokemon.name == name))
        return result.scalar_one()

    async def capture(self, user_id: uuid.UUID, name: str) -> CaughtPokemon:
        pokemon = await self.get_or_create_pokemon(name)
        caught = CaughtPokemon(user_id=user_id, pokemon=pokemon)
        self.db.add(caught)
        await self.db.commit()

        logger.info("collection.captured", caught_id=str(caught.id), pokemon=name)
        return caught

    async def release(self, user_id: uuid.UUID, caught_id: uuid.UUID) -> int:
        """Delete one capture if the caller owns it.

        Returns the number of rows removed (0 or 1). Zero is not an
        error: the caller learns nothing about other users' records.
        """
        result = await self.db.execute(
            delete(CaughtPokemon)
            .where(
                CaughtPokemon.id == caught_id,
                CaughtPokemon.user_id == user_id,
            )
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()

        logger.info("collection.released", caught_id=str(caught_id), deleted=result.rowcount)
        return result.rowcount

    async def list_caught(self, user_id: uuid.UUID) -> list[CaughtPokemon]:
        result = await self.db.execute(
            select(CaughtPokemon)
            .where(CaughtPokemon.user_id == user_id)
            .options(selectinload(CaughtPokemon.pokemon))
            .order_by(CaughtPokemon.created_at, CaughtPokemon.id)
        )
        return list(result.scalars().all())
