"""Notification sink interface.

Code that wants to tell the user something receives a sink explicitly and
calls one of the severity helpers; it never reaches for a global.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class AbstractNotificationSink(ABC):
    """Capability to surface user-facing notifications."""

    @abstractmethod
    def success(self, message: str, **options: Any) -> int:
        raise NotImplementedError

    @abstractmethod
    def error(self, message: str, **options: Any) -> int:
        raise NotImplementedError

    @abstractmethod
    def warning(self, message: str, **options: Any) -> int:
        raise NotImplementedError

    @abstractmethod
    def info(self, message: str, **options: Any) -> int:
        raise NotImplementedError
