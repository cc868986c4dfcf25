"""Named rate limit presets.

Routes pick a preset by name instead of spelling out numbers inline.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from adsdash.adapters.rate_limit.base import RateLimitPolicy
from adsdash.core.errors import ValidationAppError

RATE_LIMIT_PRESETS: Mapping[str, RateLimitPolicy] = MappingProxyType(
    {
        # General API endpoints
        "default": RateLimitPolicy(max_requests=100, window_seconds=60),
        # Sign-in and other credential endpoints
        "auth": RateLimitPolicy(max_requests=5, window_seconds=60, block_seconds=5 * 60),
        # Calls that fan out to the Google Ads API
        "google_ads": RateLimitPolicy(max_requests=15, window_seconds=60),
        # LLM-backed endpoints
        "ai": RateLimitPolicy(max_requests=10, window_seconds=60),
        "bulk": RateLimitPolicy(max_requests=5, window_seconds=60),
        "reports": RateLimitPolicy(max_requests=10, window_seconds=5 * 60),
    }
)


def get_policy(name: str) -> RateLimitPolicy:
    """Look up a preset by name.

    Raises:
        ValidationAppError: If no preset has that name.
    """
    try:
        return RATE_LIMIT_PRESETS[name]
    except KeyError:
        raise ValidationAppError(
            code="unknown_rate_limit_preset",
            message=f"Unknown rate limit preset: '{name}'",
            details={"preset": name, "hint": ", ".join(sorted(RATE_LIMIT_PRESETS))},
        ) from None
