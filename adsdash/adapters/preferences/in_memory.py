from __future__ import annotations

from adsdash.adapters.preferences.base import AbstractPreferenceStore


class InMemoryPreferenceStore(AbstractPreferenceStore):
    """Process-local store; nothing survives a restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
