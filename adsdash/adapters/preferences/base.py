"""Key-value preference storage interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractPreferenceStore(ABC):
    """Tiny string key-value store for user preferences."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value or None.

        Raises:
            StorageAppError: If the backend cannot be read.
        """
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key``.

        Raises:
            StorageAppError: If the backend cannot be written.
        """
        raise NotImplementedError
