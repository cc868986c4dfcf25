"""Bounded in-memory buffer of client-reported errors.

Newest entries sit at the front; once ``max_entries`` is reached the
oldest one falls off the back. Nothing is persisted: the buffer lives and
dies with the process.
"""

from __future__ import annotations

import logging
from collections import deque

from adsdash.core.config import settings
from adsdash.schemas.error_log import ErrorLogEntry

logger = logging.getLogger(__name__)

MAX_LOGS = 1000
MAX_LIST = 100


class ErrorLogBuffer:
    """Most-recent-first, capacity-bounded error store."""

    def __init__(self, max_entries: int = MAX_LOGS, max_list: int = MAX_LIST) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        if max_list < 1:
            raise ValueError("max_list must be >= 1")
        self._entries: deque[ErrorLogEntry] = deque(maxlen=max_entries)
        self._max_list = max_list

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def max_entries(self) -> int:
        return self._entries.maxlen or 0

    @property
    def max_list(self) -> int:
        return self._max_list

    def record(self, entry: ErrorLogEntry) -> None:
        # deque(maxlen) drops from the right, i.e. the oldest entry
        self._entries.appendleft(entry)

    def list(self, limit: int) -> list[ErrorLogEntry]:
        """Return up to ``min(limit, max_list)`` newest entries."""
        count = max(0, min(limit, self._max_list))
        return [self._entries[i] for i in range(min(count, len(self._entries)))]

    def clear(self) -> None:
        self._entries.clear()


_buffer: ErrorLogBuffer | None = None


def get_error_log_buffer() -> ErrorLogBuffer:
    """Return the process-wide buffer (usable as a FastAPI dependency)."""

    global _buffer
    if _buffer is None:
        _buffer = ErrorLogBuffer(
            max_entries=settings.app.error_log_max_entries,
            max_list=settings.app.error_log_max_list,
        )
    return _buffer
