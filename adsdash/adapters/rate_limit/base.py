"""Rate limiter interfaces.

Routes depend on this abstraction rather than on the in-memory store, so the
counters can move to a shared backend (e.g. Redis) when the API runs with
more than one worker.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitPolicy:
    """How many requests a key may make per window.

    Attributes:
        max_requests: Requests allowed per window.
        window_seconds: Window length in seconds.
        block_seconds: When set, exceeding the limit blocks the key for this
            long instead of only until the window ends.
    """

    max_requests: int
    window_seconds: float
    block_seconds: float | None = None

    def __post_init__(self) -> None:
        if self.max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        if self.block_seconds is not None and self.block_seconds <= 0:
            raise ValueError("block_seconds must be > 0 when set")


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a rate limit check.

    Attributes:
        allowed: Whether the request may proceed.
        limit: Max requests per window.
        remaining: Requests left in the current window (0 when rejected).
        reset_at: UNIX time (seconds) when the window or block ends.
        retry_after_seconds: Suggested wait when rejected.
        blocked: True when the key is serving a temporary block.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after_seconds: int | None = None
    blocked: bool = False


@dataclass(frozen=True)
class RateLimitStatus:
    """Read-only view of a key, as returned by ``status()``."""

    remaining: int
    reset_at: float | None
    blocked: bool


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def check(self, key: str, policy: RateLimitPolicy) -> RateLimitResult:
        """Count one request for ``key`` and decide whether it is allowed.

        Args:
            key: Caller identity, usually client IP plus route.
            policy: Limits to apply.

        Returns:
            RateLimitResult; rejection is reported, never raised.
        """
        raise NotImplementedError

    @abstractmethod
    def status(self, key: str, policy: RateLimitPolicy) -> RateLimitStatus:
        """Inspect ``key`` without consuming budget."""
        raise NotImplementedError

    @abstractmethod
    def reset(self, key: str) -> None:
        """Forget all state for ``key``."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Forget all keys."""
        raise NotImplementedError

    @abstractmethod
    def cleanup(self, max_age_seconds: float) -> int:
        """Evict idle keys older than ``max_age_seconds``; return how many."""
        raise NotImplementedError
