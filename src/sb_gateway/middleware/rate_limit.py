"""Fixed-window rate limiting backed by Redis.

Rules (per client IP, 60 second window):
  - write: POST/PUT/PATCH/DELETE   RATE_LIMIT_WRITE_PER_MIN
  - read:  everything else         RATE_LIMIT_READ_PER_MIN
/health is never limited.

Key pattern: "ratelimit:{client_ip}:{group}". INCR and EXPIRE NX run in one
MULTI pipeline, so a counter never outlives its window. X-Forwarded-For
(first hop) is used only when RATE_LIMIT_TRUST_FORWARDED is set.
"""

import logging
from collections.abc import Awaitable, Callable

import redis.asyncio as aioredis
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from config.settings import settings
from src.sb_common.errors import RateLimitError
from src.sb_common.redis_client import get_redis
from src.sb_common.response import error_response

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60
_WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
_EXEMPT_PATHS = frozenset({"/health"})


def client_ip(request: Request, trust_forwarded: bool = False) -> str:
    forwarded = request.headers.get("x-forwarded-for") if trust_forwarded else None
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def limit_group(method: str) -> str:
    return "write" if method.upper() in _WRITE_METHODS else "read"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
        enabled: bool | None = None,
        trust_forwarded: bool | None = None,
    ) -> None:
        super().__init__(app)
        self._redis_factory = redis_factory
        self._enabled = settings.RATE_LIMIT_ENABLED if enabled is None else enabled
        self._trust_forwarded = (
            settings.RATE_LIMIT_TRUST_FORWARDED if trust_forwarded is None else trust_forwarded
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._enabled or request.url.path in _EXEMPT_PATHS:
            return await call_next(request)

        group = limit_group(request.method)
        limit = (
            settings.RATE_LIMIT_WRITE_PER_MIN
            if group == "write"
            else settings.RATE_LIMIT_READ_PER_MIN
        )
        key = f"ratelimit:{client_ip(request, self._trust_forwarded)}:{group}"

        redis = await self._redis_factory()
        async with redis.pipeline(transaction=True) as pipe:
            pipe.incr(key)
            pipe.expire(key, WINDOW_SECONDS, nx=True)
            count, _ = await pipe.execute()

        if count > limit:
            logger.warning("Rate limit exceeded: key=%s count=%d limit=%d", key, count, limit)
            err = RateLimitError()
            resp = error_response(err.code, err.message, request)
            return JSONResponse(
                status_code=err.http_status,
                content=resp.model_dump(),
                headers={"Retry-After": str(WINDOW_SECONDS)},
            )
        return await call_next(request)
