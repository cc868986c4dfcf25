"""Rate limiting adapters.

Starts with an in-memory limiter; the abstract interface leaves room for a
shared store without touching the API layer.
"""

from adsdash.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitPolicy,
    RateLimitResult,
    RateLimitStatus,
)
from adsdash.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from adsdash.adapters.rate_limit.policies import RATE_LIMIT_PRESETS, get_policy

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "RATE_LIMIT_PRESETS",
    "RateLimitPolicy",
    "RateLimitResult",
    "RateLimitStatus",
    "get_policy",
]
