"""SQLAlchemy ORM models: single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table.

Key concepts:
- UUID primary keys generated in Python, so ids exist right after flush
- UNIQUE constraints carry the race-sensitive invariants (one user per
  email, one Pokemon row per name). The application never pre-checks
- Uuid/DateTime are generic types: PostgreSQL in production, SQLite in tests
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


class User(Base):
    """A registered player.

    Learn: email is matched exactly, no lower-casing or trimming.
    password_hash is the bcrypt string; the plaintext is never stored.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )


class Pokemon(Base):
    """A species, shared by every player. Created on first capture."""

    __tablename__ = "pokemon"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )


class CaughtPokemon(Base):
    """One capture: a user owns one instance of a species.

    Learn: Not deduplicated: catching Pikachu twice gives two rows.
    Every read and delete filters on user_id; an id alone is never enough.
    """

    __tablename__ = "caught_pokemon"
    __table_args__ = (
        Index("ix_caught_pokemon_user_created", "user_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    pokemon_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("pokemon.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    pokemon: Mapped["Pokemon"] = relationship()
