"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before anything imports ``adsdash.core.config``.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("APP_THEME_STORE_PATH", os.path.join("var", "test-preferences.json"))

import pytest

from adsdash.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from adsdash.core import rate_limit as rate_limit_module


class FakeClock:
    """Deterministic clock for window and block expiry."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FakeHandle:
    def __init__(self, scheduler: "FakeScheduler", when: float, callback) -> None:
        self._scheduler = scheduler
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Scheduler whose time only moves when a test calls ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def schedule(self, callback, delay_seconds: float) -> FakeHandle:
        handle = FakeHandle(self, self.now + delay_seconds, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (h for h in self.handles if not h.cancelled and h.when <= self.now),
            key=lambda h: h.when,
        )
        for handle in due:
            self.handles.remove(handle)
            handle.callback()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    """Give every test its own limiter state."""
    rate_limit_module.set_rate_limiter(InMemoryFixedWindowRateLimiter())
    yield
    rate_limit_module.set_rate_limiter(None)
