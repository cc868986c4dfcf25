"""Toast notification queue.

Keeps every pending toast in insertion order. Only the first
``max_visible`` are exposed for rendering; the rest wait in the queue and
move up as visible ones are dismissed. Non-persistent toasts dismiss
themselves through the injected scheduler.

Usage:
    toasts = create_toast_queue(AsyncioScheduler())
    toasts.success("Campaign paused", undo=resume_campaign)
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, get_args

from adsdash.adapters.notifications.base import AbstractNotificationSink
from adsdash.adapters.scheduler.base import AbstractScheduler, CancelHandle
from adsdash.core.config import settings

logger = logging.getLogger(__name__)

Severity = Literal["success", "info", "warning", "error"]

MAX_VISIBLE_TOASTS = 3
DEFAULT_DURATION_MS = 5000
ERROR_DURATION_MS = 8000


@dataclass(frozen=True)
class ToastAction:
    label: str
    on_click: Callable[[], None]


@dataclass(frozen=True)
class Toast:
    """A single notification.

    ``duration_ms == 0`` marks a persistent toast that stays until dismissed.
    """

    id: int
    message: str
    severity: Severity
    duration_ms: int
    action: ToastAction | None = None
    undo: Callable[[], None] | None = None

    @property
    def persistent(self) -> bool:
        return self.duration_ms == 0


@dataclass(frozen=True)
class ToastSnapshot:
    """What a renderer needs: the visible toasts and how many are waiting."""

    visible: tuple[Toast, ...]
    queued_count: int


ToastListener = Callable[[ToastSnapshot], None]


class ToastQueue(AbstractNotificationSink):
    """Bounded-visibility toast manager.

    Example:
        >>> queue = ToastQueue(AsyncioScheduler())
        >>> toast_id = queue.error("Sync failed")
        >>> queue.remove_toast(toast_id)
    """

    def __init__(
        self,
        scheduler: AbstractScheduler,
        *,
        max_visible: int = MAX_VISIBLE_TOASTS,
        default_duration_ms: int = DEFAULT_DURATION_MS,
        error_duration_ms: int = ERROR_DURATION_MS,
    ) -> None:
        if max_visible < 1:
            raise ValueError("max_visible must be >= 1")
        self._scheduler = scheduler
        self._max_visible = max_visible
        self._default_duration_ms = default_duration_ms
        self._error_duration_ms = error_duration_ms
        self._ids = itertools.count(1)
        self._toasts: list[Toast] = []
        self._timers: dict[int, CancelHandle] = {}
        self._listeners: list[ToastListener] = []

    def __len__(self) -> int:
        return len(self._toasts)

    @property
    def visible(self) -> tuple[Toast, ...]:
        return tuple(self._toasts[: self._max_visible])

    @property
    def queued_count(self) -> int:
        return max(0, len(self._toasts) - self._max_visible)

    def snapshot(self) -> ToastSnapshot:
        return ToastSnapshot(visible=self.visible, queued_count=self.queued_count)

    def get(self, toast_id: int) -> Toast | None:
        for toast in self._toasts:
            if toast.id == toast_id:
                return toast
        return None

    def default_duration_for(self, severity: Severity) -> int:
        if severity == "error":
            return self._error_duration_ms
        return self._default_duration_ms

    def add_toast(
        self,
        message: str,
        severity: Severity = "info",
        *,
        duration_ms: int | None = None,
        action: ToastAction | None = None,
        undo: Callable[[], None] | None = None,
    ) -> int:
        """Queue a toast and return its id.

        Args:
            message: Text to show.
            severity: One of success, info, warning, error.
            duration_ms: Auto-dismiss delay; ``None`` uses the severity
                default, ``0`` makes the toast persistent.
            action: Optional labelled callback.
            undo: Optional undo callback.

        Raises:
            ValueError: On an unknown severity or a negative duration.
        """
        if severity not in get_args(Severity):
            raise ValueError(f"Unknown toast severity: {severity!r}")
        if duration_ms is None:
            duration_ms = self.default_duration_for(severity)
        if duration_ms < 0:
            raise ValueError("duration_ms must be >= 0")

        toast = Toast(
            id=next(self._ids),
            message=message,
            severity=severity,
            duration_ms=duration_ms,
            action=action,
            undo=undo,
        )
        self._toasts.append(toast)

        if not toast.persistent:
            self._timers[toast.id] = self._scheduler.schedule(
                lambda: self.remove_toast(toast.id),
                duration_ms / 1000,
            )

        logger.debug(
            "toast.added",
            extra={
                "toast_id": toast.id,
                "severity": severity,
                "duration_ms": duration_ms,
                "queued": self.queued_count,
            },
        )
        self._notify()
        return toast.id

    def remove_toast(self, toast_id: int) -> None:
        """Dismiss a toast. Unknown or already-removed ids are ignored."""
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()

        for index, toast in enumerate(self._toasts):
            if toast.id == toast_id:
                del self._toasts[index]
                break
        else:
            return

        self._notify()

    def clear(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        had_toasts = bool(self._toasts)
        self._toasts.clear()
        if had_toasts:
            self._notify()

    def undo(self, toast_id: int) -> None:
        """Run the toast's undo callback, then dismiss it."""
        toast = self.get(toast_id)
        if toast is None:
            return
        if toast.undo is not None:
            toast.undo()
        self.remove_toast(toast_id)

    def run_action(self, toast_id: int) -> None:
        """Run the toast's action callback, then dismiss it."""
        toast = self.get(toast_id)
        if toast is None:
            return
        if toast.action is not None:
            toast.action.on_click()
        self.remove_toast(toast_id)

    def subscribe(self, listener: ToastListener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every change.

        Returns:
            Callable that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # AbstractNotificationSink

    def success(self, message: str, **options: Any) -> int:
        return self.add_toast(message, "success", **options)

    def error(self, message: str, **options: Any) -> int:
        return self.add_toast(message, "error", **options)

    def warning(self, message: str, **options: Any) -> int:
        return self.add_toast(message, "warning", **options)

    def info(self, message: str, **options: Any) -> int:
        return self.add_toast(message, "info", **options)


def create_toast_queue(scheduler: AbstractScheduler) -> ToastQueue:
    """Build a ToastQueue with limits and durations from settings."""
    return ToastQueue(
        scheduler,
        max_visible=settings.app.toast_max_visible,
        default_duration_ms=settings.app.toast_default_duration_ms,
        error_duration_ms=settings.app.toast_error_duration_ms,
    )
