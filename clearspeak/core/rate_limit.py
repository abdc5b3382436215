"""Rate limiting configuration using slowapi."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from clearspeak.core.config import Settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, try again later."


def build_limiter(settings: Settings) -> Limiter:
    """
    Return a per-app limiter keyed by client address.

    The default limit covers every route; SlowAPIMiddleware enforces it.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[f"{settings.rate_limit_per_min}/minute"],
        enabled=settings.rate_limit_enabled,
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # SlowAPIMiddleware calls this without awaiting it, so it stays sync.
    logger.warning("Rate limit hit on %s: %s", request.url.path, exc.detail)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": RATE_LIMIT_MESSAGE},
    )
