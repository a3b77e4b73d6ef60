"""
Rate Limiting for PlotDesk API
==============================
Implements rate limiting using slowapi (in-memory storage by default).

Every route gets RATE_LIMIT_PER_MINUTE through SlowAPIMiddleware.
Public credential endpoints have their own, tighter limits:
- /auth/login: 5 req/min (brute force protection)
- /auth/register: 3 req/min
- /auth/reset-password: 3 req/min

Set RATE_LIMIT_ENABLED=false to switch limiting off (tests, local runs).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from plotdesk.core.config import settings
from plotdesk.core.logging_config import logger


def get_user_identifier(request: Request) -> str:
    """
    Get rate limit key.

    Authenticated requests are keyed by user id, everything else by IP.
    """
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"

    return f"ip:{get_remote_address(request)}"


# Create limiter instance
limiter = Limiter(
    key_func=get_user_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """JSON 429 with a Retry-After hint"""
    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": "Too many requests. Please slow down.",
            "error": {"code": "RATE_LIMITED", "message": str(exc.detail), "details": {}},
        },
        headers={"Retry-After": "60"},
    )


def auth_rate_limit():
    """Rate limit for login (5/min)"""
    return limiter.limit("5/minute", key_func=get_user_identifier)


def strict_rate_limit():
    """Very strict rate limit for sign-up and password reset (3/min)"""
    return limiter.limit("3/minute", key_func=get_user_identifier)


def ai_operation_rate_limit():
    """Rate limit for AI operations (10/min)"""
    return limiter.limit("10/minute", key_func=get_user_identifier)
