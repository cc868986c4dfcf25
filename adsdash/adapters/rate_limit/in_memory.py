"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- A window opens at a key's first request and lasts ``window_seconds``;
  up to twice the limit can pass across a window edge.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from adsdash.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitPolicy,
    RateLimitResult,
    RateLimitStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 24 * 60 * 60


@dataclass
class _WindowState:
    window_start: float
    count: int
    blocked_until: float | None = None


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Fixed-window request counter keyed by caller.

    Each call for a key either opens a fresh window (count=1) or increments
    the count of the current one. The count only grows inside a window, so
    rejected calls keep counting too.
    """

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        """Initialize the limiter.

        Args:
            clock: Time source returning UNIX time in seconds.
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._state_by_key: dict[str, _WindowState] = {}

    def __len__(self) -> int:
        return len(self._state_by_key)

    @staticmethod
    def _window_expired(state: _WindowState, policy: RateLimitPolicy, now: float) -> bool:
        return now >= state.window_start + policy.window_seconds

    def _blocked_result(self, policy: RateLimitPolicy, now: float, until: float) -> RateLimitResult:
        return RateLimitResult(
            allowed=False,
            limit=policy.max_requests,
            remaining=0,
            reset_at=until,
            retry_after_seconds=max(0, int(math.ceil(until - now))),
            blocked=True,
        )

    def check(self, key: str, policy: RateLimitPolicy) -> RateLimitResult:
        """Count one request for ``key`` under ``policy``.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()

        with self._lock:
            state = self._state_by_key.get(key)

            if state is not None and state.blocked_until is not None:
                if now < state.blocked_until:
                    return self._blocked_result(policy, now, state.blocked_until)
                # Block served; start over
                state = None

            if state is None or self._window_expired(state, policy, now):
                state = _WindowState(window_start=now, count=1)
                self._state_by_key[key] = state
                return RateLimitResult(
                    allowed=True,
                    limit=policy.max_requests,
                    remaining=policy.max_requests - 1,
                    reset_at=now + policy.window_seconds,
                )

            state.count += 1
            reset_at = state.window_start + policy.window_seconds

            if state.count <= policy.max_requests:
                return RateLimitResult(
                    allowed=True,
                    limit=policy.max_requests,
                    remaining=policy.max_requests - state.count,
                    reset_at=reset_at,
                )

            if policy.block_seconds:
                state.blocked_until = now + policy.block_seconds
                logger.warning(
                    "rate_limit.key_blocked",
                    extra={"block_s": policy.block_seconds, "count": state.count},
                )
                return self._blocked_result(policy, now, state.blocked_until)

            return RateLimitResult(
                allowed=False,
                limit=policy.max_requests,
                remaining=0,
                reset_at=reset_at,
                retry_after_seconds=max(0, int(math.ceil(reset_at - now))),
            )

    def status(self, key: str, policy: RateLimitPolicy) -> RateLimitStatus:
        now = self._clock()
        with self._lock:
            state = self._state_by_key.get(key)
            if state is None:
                return RateLimitStatus(remaining=policy.max_requests, reset_at=None, blocked=False)

            if state.blocked_until is not None and now < state.blocked_until:
                return RateLimitStatus(remaining=0, reset_at=state.blocked_until, blocked=True)

            if state.blocked_until is not None or self._window_expired(state, policy, now):
                return RateLimitStatus(remaining=policy.max_requests, reset_at=None, blocked=False)

            return RateLimitStatus(
                remaining=max(0, policy.max_requests - state.count),
                reset_at=state.window_start + policy.window_seconds,
                blocked=False,
            )

    def reset(self, key: str) -> None:
        with self._lock:
            self._state_by_key.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._state_by_key.clear()

    def cleanup(self, max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS) -> int:
        """Evict keys whose window opened more than ``max_age_seconds`` ago.

        Keys still serving a block are kept.

        Returns:
            Number of evicted keys.
        """
        now = self._clock()
        with self._lock:
            stale = [
                key
                for key, state in self._state_by_key.items()
                if now - state.window_start > max_age_seconds
                and (state.blocked_until is None or state.blocked_until <= now)
            ]
            for key in stale:
                del self._state_by_key[key]

        if stale:
            logger.debug("rate_limit.cleanup", extra={"evicted": len(stale)})
        return len(stale)
