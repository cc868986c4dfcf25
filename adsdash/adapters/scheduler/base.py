"""Delayed-callback scheduling interface.

Toast auto-dismiss and debounced preference writes only need
"run this later, unless cancelled". Keeping that behind an interface lets
tests drive time by hand.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Protocol


class CancelHandle(Protocol):
    """Anything with an idempotent ``cancel()``."""

    def cancel(self) -> None: ...


class AbstractScheduler(ABC):
    """Interface for one-shot delayed callbacks."""

    @abstractmethod
    def schedule(self, callback: Callable[[], None], delay_seconds: float) -> CancelHandle:
        """Run ``callback`` once after ``delay_seconds``.

        Args:
            callback: Zero-argument callable.
            delay_seconds: Delay before the call (>= 0).

        Returns:
            Handle whose ``cancel()`` prevents the call if it has not run.
        """
        raise NotImplementedError
