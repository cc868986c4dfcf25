"""Theme preference resolution.

A user picks ``light``, ``dark`` or ``system``. The rendered theme is always
``light`` or ``dark``: explicit choices win, ``system`` follows the ambient
color-scheme signal and keeps following it as it changes.

Usage:
    resolver = create_theme_resolver(ManualSystemScheme(prefers_dark=True))
    resolver.toggle_theme()
"""

from __future__ import annotations

import logging
from typing import Callable, Literal, get_args

from adsdash.adapters.preferences.base import AbstractPreferenceStore
from adsdash.adapters.preferences.json_file import JsonFilePreferenceStore
from adsdash.adapters.preferences.system_scheme import AbstractSystemSchemeSource
from adsdash.adapters.scheduler.base import AbstractScheduler, CancelHandle
from adsdash.core.config import settings
from adsdash.core.errors import StorageAppError

logger = logging.getLogger(__name__)

ThemePreference = Literal["light", "dark", "system"]
ResolvedTheme = Literal["light", "dark"]

THEME_PREFERENCES: tuple[str, ...] = get_args(ThemePreference)
DEFAULT_PREFERENCE: ThemePreference = "system"
DEFAULT_STORAGE_KEY = "theme"

ThemeListener = Callable[[ResolvedTheme], None]


def resolve_theme(preference: ThemePreference, system_prefers_dark: bool) -> ResolvedTheme:
    """Map a preference and the system signal to a concrete theme."""
    if preference == "system":
        return "dark" if system_prefers_dark else "light"
    return preference


def is_theme_preference(value: object) -> bool:
    return isinstance(value, str) and value in THEME_PREFERENCES


class ThemeResolver:
    """Holds the current preference and keeps the resolved theme current.

    The stored preference is read once here; afterwards it is written on
    every explicit change (or, with a scheduler and a positive
    ``persist_delay_seconds``, once the changes settle).
    """

    def __init__(
        self,
        store: AbstractPreferenceStore,
        system: AbstractSystemSchemeSource,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        scheduler: AbstractScheduler | None = None,
        persist_delay_seconds: float = 0.0,
    ) -> None:
        if persist_delay_seconds < 0:
            raise ValueError("persist_delay_seconds must be >= 0")
        self._store = store
        self._system = system
        self._storage_key = storage_key
        self._scheduler = scheduler
        self._persist_delay = persist_delay_seconds
        self._pending_write: CancelHandle | None = None
        self._listeners: list[ThemeListener] = []

        self._preference: ThemePreference = self._load_preference()
        self._resolved: ResolvedTheme = resolve_theme(self._preference, system.prefers_dark())
        self._unsubscribe_system = system.subscribe(self._on_system_change)

    @property
    def preference(self) -> ThemePreference:
        return self._preference

    @property
    def resolved_theme(self) -> ResolvedTheme:
        return self._resolved

    def _load_preference(self) -> ThemePreference:
        try:
            stored = self._store.get(self._storage_key)
        except StorageAppError as exc:
            logger.warning(
                "theme.storage_read_failed",
                extra={"error_code": exc.code, "storage_key": self._storage_key},
            )
            return DEFAULT_PREFERENCE

        if stored is None:
            return DEFAULT_PREFERENCE
        if not is_theme_preference(stored):
            logger.info(
                "theme.stored_value_ignored",
                extra={"storage_key": self._storage_key, "stored_value": stored},
            )
            return DEFAULT_PREFERENCE
        return stored  # type: ignore[return-value]

    def set_theme(self, preference: ThemePreference) -> None:
        """Switch to ``preference``, persist it and re-resolve.

        Raises:
            ValueError: If ``preference`` is not light, dark or system.
        """
        if not is_theme_preference(preference):
            raise ValueError(f"Invalid theme preference: {preference!r}")

        self._preference = preference
        self._schedule_persist(preference)
        self._recompute()

    def toggle_theme(self) -> None:
        """Pin the opposite of the currently resolved theme.

        From ``system`` this snaps to a concrete value; it never cycles back
        to ``system``.
        """
        self.set_theme("light" if self._resolved == "dark" else "dark")

    def subscribe(self, listener: ThemeListener) -> Callable[[], None]:
        """Call ``listener(resolved)`` whenever the resolved theme changes."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def flush(self) -> None:
        """Write a debounced preference now, if one is pending."""
        if self._pending_write is None:
            return
        self._pending_write.cancel()
        self._pending_write = None
        self._persist(self._preference)

    def close(self) -> None:
        """Flush pending writes and stop following the system signal."""
        self.flush()
        self._unsubscribe_system()

    def _on_system_change(self, prefers_dark: bool) -> None:
        if self._preference == "system":
            self._recompute(prefers_dark)

    def _recompute(self, prefers_dark: bool | None = None) -> None:
        if prefers_dark is None:
            prefers_dark = self._system.prefers_dark()
        resolved = resolve_theme(self._preference, prefers_dark)
        if resolved == self._resolved:
            return
        self._resolved = resolved
        logger.debug(
            "theme.resolved",
            extra={"preference": self._preference, "resolved": resolved},
        )
        for listener in list(self._listeners):
            listener(resolved)

    def _schedule_persist(self, preference: ThemePreference) -> None:
        if self._scheduler is None or self._persist_delay == 0:
            self._persist(preference)
            return

        if self._pending_write is not None:
            self._pending_write.cancel()

        def write() -> None:
            self._pending_write = None
            self._persist(self._preference)

        self._pending_write = self._scheduler.schedule(write, self._persist_delay)

    def _persist(self, preference: ThemePreference) -> None:
        try:
            self._store.set(self._storage_key, preference)
        except StorageAppError as exc:
            logger.warning(
                "theme.storage_write_failed",
                extra={"error_code": exc.code, "storage_key": self._storage_key},
            )


def create_theme_resolver(
    system: AbstractSystemSchemeSource,
    *,
    store: AbstractPreferenceStore | None = None,
) -> ThemeResolver:
    """Build a ThemeResolver using the configured store path and key."""
    return ThemeResolver(
        store or JsonFilePreferenceStore(settings.app.theme_store_path),
        system,
        storage_key=settings.app.theme_storage_key,
    )
