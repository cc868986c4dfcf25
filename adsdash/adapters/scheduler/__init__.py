"""Scheduling adapters for timers (toast auto-dismiss, debounced writes)."""

from adsdash.adapters.scheduler.asyncio_scheduler import AsyncioScheduler
from adsdash.adapters.scheduler.base import AbstractScheduler, CancelHandle

__all__ = ["AbstractScheduler", "AsyncioScheduler", "CancelHandle"]
