"""Auth API: registration and login.

Learn: Routes for the two identity operations:
- POST /register → create an account (password stored as bcrypt hash)
- POST /login → email/password → 30-minute JWT bearer token

Both are open routes. Errors come from AuthService as typed exceptions
and are turned into responses by the app-wide handler.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pokecatch.auth.dependencies import get_token_codec
from pokecatch.auth.jwt import TokenCodec
from pokecatch.db.engine import get_db
from pokecatch.schemas.auth import Credentials, LoginResponse, MessageResponse
from pokecatch.services.auth_service import AuthService

router = APIRouter()


def get_auth_service(
    request: Request,
    db: AsyncSession = Depends(get_db),
    tokens: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    return AuthService(db, tokens, bcrypt_rounds=request.app.state.settings.bcrypt_rounds)


@router.post("/register", response_model=MessageResponse)
async def register(body: Credentials, svc: AuthService = Depends(get_auth_service)):
    """Create a new user account."""
    user = await svc.register(body.email, body.password)
    return {"message": f"{user.email} registered successfully"}


@router.post("/login", response_model=LoginResponse)
async def login(body: Credentials, svc: AuthService = Depends(get_auth_service)):
    """Login with email and password → JWT token."""
    token = await svc.login(body.email, body.password)
    return {"message": "Login successful", "token": token}
