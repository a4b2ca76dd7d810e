"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
A token carries the user id ("sub") and an absolute expiry ("exp"),
signed with HMAC-SHA256. There is no server-side revocation list:
a token is valid exactly when its signature checks out and "exp"
is still in the future.

TokenCodec holds the secret. One instance is built per application
from settings (see main.create_app), so tests can mint tokens with
their own secret and clock.
"""

import time
import uuid
from typing import Callable

import jwt

from pokecatch.config import Settings


class TokenError(Exception):
    """Raised when token verification fails."""


class BadSignature(TokenError):
    """Signature does not match the server secret."""


class ExpiredToken(TokenError):
    """The "exp" claim is not in the future."""


class MalformedToken(TokenError):
    """Missing, undecodable, or carrying unusable claims."""


class TokenCodec:
    """Issue and verify signed, time-limited identity tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 30,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl_seconds = expire_minutes * 60
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def issue(self, subject_id: uuid.UUID | str) -> str:
        """Create a token for subject_id expiring ttl_seconds from now.

        Learn: "exp" keeps the clock's fractional seconds (NumericDate
        allows it), so a token lives exactly ttl_seconds and not up to
        a second less.
        """
        now = self._clock()
        payload = {
            "sub": str(subject_id),
            "iat": int(now),
            "exp": now + self.ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        """Verify a token and return the subject id.

        Order of checks: signature, then expiry, then the claims.
        Raises a TokenError subclass on failure.
        """
        if not token:
            raise MalformedToken("Token is empty")

        try:
            # Expiry is checked below against our own clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "verify_sub": False},
            )
        except jwt.InvalidSignatureError:
            raise BadSignature("Signature verification failed")
        except jwt.InvalidTokenError as e:
            raise MalformedToken(f"Undecodable token: {e}")

        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise MalformedToken("Missing or non-numeric exp claim")
        if exp <= self._clock():
            raise ExpiredToken("Token has expired")

        sub = payload.get("sub")
        if not isinstance(sub, str):
            raise MalformedToken("Missing sub claim")
        try:
            return uuid.UUID(sub)
        except ValueError:
            raise MalformedToken("sub claim is not a user id")
