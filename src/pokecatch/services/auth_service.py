"""Auth service: registration and login.

Learn: Service layer separates business logic from HTTP routing.
Routes call services, services call the database and raise typed
errors from pokecatch.errors; only the app's exception handler turns
those into status codes.

Duplicate emails are caught by the UNIQUE constraint on users.email,
not by a SELECT beforehand. Two concurrent registrations for the same
address cannot both pass a pre-check that way.
"""

import asyncio

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokecatch.auth.jwt import TokenCodec
from pokecatch.auth.password import hash_password, verify_password
from pokecatch.db.models import User
from pokecatch.errors import (
    DuplicateEmail,
    InternalFailure,
    InvalidCredentials,
    UserNotFound,
)

logger = structlog.get_logger()


class AuthService:
    """Business logic for user accounts."""

    def __init__(self, db: AsyncSession, tokens: TokenCodec, bcrypt_rounds: int | None = None):
        self.db = db
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, email: str, password: str) -> User:
        # bcrypt is CPU-bound; keep it off the event loop.
        password_hash = await asyncio.to_thread(
            hash_password, password, self.bcrypt_rounds
        )

        user = User(email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("auth.register_duplicate")
            raise DuplicateEmail()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("auth.register_failed", error_type=type(e).__name__)
            raise InternalFailure()

        logger.info("auth.registered", user_id=str(user.id))
        return user

    async def login(self, email: str, password: str) -> str:
        """Check credentials and return a fresh access token.

        Learn: An unknown email (404) and a wrong password (401) are
        reported differently. That lets a caller discover which emails
        have accounts; it is kept on purpose, see DESIGN.md.
        """
        result = await self.db.execute(
            select(User.id, User.password_hash).where(User.email == email)
        )
        row = result.first()
        if row is None:
            logger.info("auth.login_failed", reason="unknown_email")
            raise UserNotFound()

        matches = await asyncio.to_thread(verify_password, password, row.password_hash)
        if not matches:
            logger.info("auth.login_failed", reason="bad_password", user_id=str(row.id))
            raise InvalidCredentials()

        logger.info("auth.login", user_id=str(row.id))
        return self.tokens.issue(row.id)
