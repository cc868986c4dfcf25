"""Rate limiting dependency for FastAPI routes.

Usage:
    @router.post("/things", dependencies=[Depends(rate_limit("bulk"))])

The limiter key is the client IP plus the route path, so each endpoint has
its own budget per client. Rejections surface as HTTP 429.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import math
from typing import Awaitable, Callable

from fastapi import HTTPException, Request, status

from adsdash.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from adsdash.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from adsdash.adapters.rate_limit.policies import get_policy
from adsdash.core.config import settings

logger = logging.getLogger(__name__)


_limiter: AbstractRateLimiter | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide limiter, creating it on first use."""

    global _limiter
    if _limiter is None:
        _limiter = InMemoryFixedWindowRateLimiter()
    return _limiter


def set_rate_limiter(limiter: AbstractRateLimiter | None) -> None:
    """Swap the process-wide limiter (``None`` rebuilds lazily)."""

    global _limiter
    _limiter = limiter


async def run_periodic_cleanup(
    interval_seconds: float,
    max_age_seconds: float,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Sweep stale limiter keys every ``interval_seconds`` until cancelled."""

    while True:
        await sleep(interval_seconds)
        evicted = get_rate_limiter().cleanup(max_age_seconds)
        logger.info("rate_limit.cleanup_ran", extra={"evicted": evicted})


def get_client_ip(request: Request) -> str:
    """Best-effort client IP, honouring proxy headers."""

    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def build_rate_limit_key(request: Request) -> str:
    return f"{get_client_ip(request)}:{request.url.path}"


def _hash_limiter_key(key: str) -> str:
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def _rejection_headers(result: RateLimitResult) -> dict[str, str]:
    return {
        "Retry-After": str(result.retry_after_seconds or 0),
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(int(math.ceil(result.reset_at))),
    }


def rate_limit(preset: str = "default") -> Callable[[Request], Awaitable[None]]:
    """Build a dependency enforcing the named preset.

    Args:
        preset: Key of ``RATE_LIMIT_PRESETS``; resolved eagerly so typos fail
            at import time.

    Returns:
        Async FastAPI dependency raising HTTP 429 when the caller is over
        budget.
    """

    policy = get_policy(preset)

    async def enforce_rate_limit(request: Request) -> None:
        if not settings.app.rate_limit_enabled:
            return

        key = build_rate_limit_key(request)
        result = get_rate_limiter().check(key, policy)
        if result.allowed:
            logger.debug(
                "rate_limit.allowed",
                extra={
                    "preset": preset,
                    "key_hash": _hash_limiter_key(key),
                    "remaining": result.remaining,
                },
            )
            return

        logger.warning(
            "rate_limit.exceeded",
            extra={
                "preset": preset,
                "key_hash": _hash_limiter_key(key),
                "route": request.url.path,
                "limit": result.limit,
                "window_s": policy.window_seconds,
                "blocked": result.blocked,
                "retry_after_s": result.retry_after_seconds,
            },
        )

        detail = (
            "Too many requests. You have been temporarily blocked."
            if result.blocked
            else "Rate limit exceeded. Please try again later."
        )
        headers = _rejection_headers(result) if settings.app.rate_limit_include_headers else None
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            headers=headers,
        )

    return enforce_rate_limit
