"""Rate limiting middleware: Redis-based fixed window.

Learn: Each client gets a counter key like "pokecatch:rl:{client}:{window}"
where window = now // window_seconds. The first hit in a window sets a TTL
so old keys clean themselves up. Default policy: 3 requests per 2 minutes.

The client is identified by X-Forwarded-For (the service normally sits
behind a proxy), falling back to the socket address.

Gracefully skips rate limiting if Redis is unavailable (e.g., in tests).
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = structlog.get_logger()


def client_key(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "default"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window request limit per client, counted in Redis."""

    def __init__(self, app, limit: int = 3, window_seconds: int = 120):
        super().__init__(app)
        self.limit = limit
        self.window_seconds = window_seconds

    async def dispatch(self, request: Request, call_next) -> Response:
        redis = getattr(request.app.state, "redis", None)
        if redis is None:
            return await call_next(request)

        client = client_key(request)
        window = int(time.time() // self.window_seconds)
        key = f"pokecatch:rl:{client}:{window}"

        try:
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, self.window_seconds * 2)
        except Exception as e:
            # Redis error: don't block the request
            logger.warning("rate_limit.redis_error", error_type=type(e).__name__)
            return await call_next(request)

        if count > self.limit:
            logger.info("rate_limit.exceeded", client=client)
            retry_after = self.window_seconds - int(time.time()) % self.window_seconds
            return JSONResponse(
                status_code=429,
                content={"message": "Too many requests, please try again later."},
                headers={"Retry-After": str(retry_after)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limit)
        response.headers["X-RateLimit-Remaining"] = str(max(0, self.limit - count))
        return response
