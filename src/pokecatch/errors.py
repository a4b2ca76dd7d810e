"""Error taxonomy and its translation to HTTP responses.

Learn: Services raise typed errors (DuplicateEmail, UserNotFound, ...)
that know nothing about FastAPI. One exception handler installed on the
app maps each of them to a fixed status code and a fixed message, so no
internal detail ever reaches a client.
"""

from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class PokecatchError(Exception):
    """Base class for errors that map to a client-visible response."""

    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[dict[str, str]]:
        return None


class DuplicateEmail(PokecatchError):
    status_code = 409
    message = "Email already exists"


class UserNotFound(PokecatchError):
    status_code = 404
    message = "User not found"


class InvalidCredentials(PokecatchError):
    status_code = 401
    message = "Invalid credentials"


class Unauthorized(PokecatchError):
    """Any token failure: missing, malformed, expired or tampered."""

    status_code = 401
    message = "Unauthorized"

    @property
    def headers(self) -> Optional[dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class PokemonNotFound(PokecatchError):
    status_code = 404
    message = "Pokemon not found"


class InternalFailure(PokecatchError):
    status_code = 500
    message = "Internal Server Error"


async def _handle_pokecatch_error(request: Request, exc: PokecatchError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers,
    )


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "http.unhandled_error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=InternalFailure.status_code,
        content={"message": InternalFailure.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the boundary translation for the whole taxonomy."""
    app.add_exception_handler(PokecatchError, _handle_pokecatch_error)
    app.add_exception_handler(Exception, _handle_unexpected)
