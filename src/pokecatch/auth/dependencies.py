"""FastAPI auth dependencies.

Learn: get_current_user is the authorization gate. It is mounted as a
router-level dependency on /protected, so it runs before any protected
handler. It knows only the token contract, nothing about Pokemon.

Every failure (no header, wrong scheme, bad signature, expired,
garbage claims) surfaces as the same 401 "Unauthorized". The precise
reason is logged, never returned.
"""

import uuid
from typing import Optional

import structlog
from fastapi import Header, Request

from pokecatch.auth.jwt import MalformedToken, TokenCodec, TokenError
from pokecatch.errors import Unauthorized

logger = structlog.get_logger()


class CurrentIdentity:
    """The authenticated user making the request.

    Learn: Downstream code scopes every collection query by user_id.
    """

    def __init__(self, user_id: uuid.UUID):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id})"


def get_token_codec(request: Request) -> TokenCodec:
    """The app-wide TokenCodec built in create_app()."""
    return request.app.state.tokens


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise MalformedToken("No Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise MalformedToken("Authorization header is not a bearer token")
    return token.strip()


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> CurrentIdentity:
    """Resolve the bearer token to an identity (required, 401 otherwise)."""
    codec = get_token_codec(request)
    try:
        user_id = codec.verify(_bearer_token(authorization))
    except TokenError as e:
        logger.info(
            "gate.rejected",
            reason=type(e).__name__,
            path=request.url.path,
        )
        raise Unauthorized()

    identity = CurrentIdentity(user_id=user_id)
    structlog.contextvars.bind_contextvars(user_id=str(user_id))
    return identity
