"""Unit tests for theme preference resolution."""

from unittest.mock import Mock

import pytest

from adsdash.adapters.preferences.base import AbstractPreferenceStore
from adsdash.adapters.preferences.in_memory import InMemoryPreferenceStore
from adsdash.adapters.preferences.json_file import JsonFilePreferenceStore
from adsdash.adapters.preferences.system_scheme import ManualSystemScheme
from adsdash.core.config import settings
from adsdash.core.errors import StorageAppError
from adsdash.services.theme_service import (
    ThemeResolver,
    create_theme_resolver,
    resolve_theme,
)


class BrokenStore(AbstractPreferenceStore):
    """Store that fails every read and write, like blocked browser storage."""

    def __init__(self) -> None:
        self.write_attempts = 0

    def get(self, key: str) -> str | None:
        raise StorageAppError(code="preference_store_unreadable", message="unavailable")

    def set(self, key: str, value: str) -> None:
        self.write_attempts += 1
        raise StorageAppError(code="preference_store_unwritable", message="unavailable")


class TestResolveTheme:
    @pytest.mark.parametrize("prefers_dark", [True, False])
    def test_explicit_preferences_ignore_system(self, prefers_dark: bool) -> None:
        assert resolve_theme("light", prefers_dark) == "light"
        assert resolve_theme("dark", prefers_dark) == "dark"

    def test_system_tracks_signal(self) -> None:
        assert resolve_theme("system", True) == "dark"
        assert resolve_theme("system", False) == "light"


class TestThemeResolver:
    def test_defaults_to_system_when_nothing_stored(self) -> None:
        resolver = ThemeResolver(InMemoryPreferenceStore(), ManualSystemScheme(prefers_dark=True))

        assert resolver.preference == "system"
        assert resolver.resolved_theme == "dark"

    def test_reads_stored_preference(self) -> None:
        store = InMemoryPreferenceStore({"theme": "light"})
        resolver = ThemeResolver(store, ManualSystemScheme(prefers_dark=True))

        assert resolver.preference == "light"
        assert resolver.resolved_theme == "light"

    def test_invalid_stored_value_falls_back_to_system(self) -> None:
        store = InMemoryPreferenceStore({"theme": "sepia"})
        resolver = ThemeResolver(store, ManualSystemScheme(prefers_dark=False))

        assert resolver.preference == "system"
        assert resolver.resolved_theme == "light"

    def test_unreadable_store_falls_back_to_system(self) -> None:
        resolver = ThemeResolver(BrokenStore(), ManualSystemScheme(prefers_dark=True))

        assert resolver.preference == "system"
        assert resolver.resolved_theme == "dark"

    def test_unwritable_store_does_not_crash(self) -> None:
        store = BrokenStore()
        resolver = ThemeResolver(store, ManualSystemScheme())

        resolver.set_theme("dark")

        assert store.write_attempts == 1
        assert resolver.resolved_theme == "dark"

    def test_set_theme_persists_and_resolves(self) -> None:
        store = InMemoryPreferenceStore()
        resolver = ThemeResolver(store, ManualSystemScheme(prefers_dark=False))

        resolver.set_theme("dark")

        assert store.get("theme") == "dark"
        assert resolver.preference == "dark"
        assert resolver.resolved_theme == "dark"

    def test_custom_storage_key(self) -> None:
        store = InMemoryPreferenceStore()
        resolver = ThemeResolver(store, ManualSystemScheme(), storage_key="ui.theme")

        resolver.set_theme("light")

        assert store.get("ui.theme") == "light"
        assert store.get("theme") is None

    def test_set_theme_rejects_unknown_value(self) -> None:
        resolver = ThemeResolver(InMemoryPreferenceStore(), ManualSystemScheme())

        with pytest.raises(ValueError):
            resolver.set_theme("blue")  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("stored", "prefers_dark", "expected"),
        [
            ("dark", False, "light"),
            ("light", True, "dark"),
            ("system", True, "light"),
            ("system", False, "dark"),
        ],
    )
    def test_toggle_pins_opposite_of_resolved(self, stored: str, prefers_dark: bool, expected: str) -> None:
        store = InMemoryPreferenceStore({"theme": stored})
        resolver = ThemeResolver(store, ManualSystemScheme(prefers_dark=prefers_dark))

        resolver.toggle_theme()

        assert resolver.preference == expected
        assert resolver.resolved_theme == expected
        assert store.get("theme") == expected

    def test_follows_system_changes_while_on_system(self) -> None:
        system = ManualSystemScheme(prefers_dark=False)
        resolver = ThemeResolver(InMemoryPreferenceStore(), system)
        listener = Mock()
        resolver.subscribe(listener)

        system.set_prefers_dark(True)

        assert resolver.resolved_theme == "dark"
        listener.assert_called_once_with("dark")

    def test_ignores_system_changes_with_explicit_preference(self) -> None:
        system = ManualSystemScheme(prefers_dark=False)
        resolver = ThemeResolver(InMemoryPreferenceStore({"theme": "light"}), system)
        listener = Mock()
        resolver.subscribe(listener)

        system.set_prefers_dark(True)

        assert resolver.resolved_theme == "light"
        listener.assert_not_called()

    def test_switching_back_to_system_uses_current_signal(self) -> None:
        system = ManualSystemScheme(prefers_dark=False)
        resolver = ThemeResolver(InMemoryPreferenceStore({"theme": "light"}), system)

        system.set_prefers_dark(True)
        resolver.set_theme("system")

        assert resolver.resolved_theme == "dark"

    def test_listener_only_fires_on_resolved_change(self) -> None:
        resolver = ThemeResolver(InMemoryPreferenceStore(), ManualSystemScheme(prefers_dark=True))
        listener = Mock()
        unsubscribe = resolver.subscribe(listener)

        resolver.set_theme("dark")
        listener.assert_not_called()

        resolver.set_theme("light")
        listener.assert_called_once_with("light")

        unsubscribe()
        resolver.set_theme("dark")
        assert listener.call_count == 1

    def test_close_detaches_from_system(self) -> None:
        system = ManualSystemScheme(prefers_dark=False)
        resolver = ThemeResolver(InMemoryPreferenceStore(), system)

        resolver.close()
        system.set_prefers_dark(True)

        assert resolver.resolved_theme == "light"


class TestDebouncedPersistence:
    def test_rapid_changes_write_once(self, fake_scheduler) -> None:
        store = Mock(spec=AbstractPreferenceStore)
        store.get.return_value = None
        resolver = ThemeResolver(
            store,
            ManualSystemScheme(),
            scheduler=fake_scheduler,
            persist_delay_seconds=0.5,
        )

        resolver.set_theme("dark")
        resolver.toggle_theme()
        resolver.set_theme("dark")

        assert resolver.resolved_theme == "dark"
        store.set.assert_not_called()

        fake_scheduler.advance(0.5)
        store.set.assert_called_once_with("theme", "dark")

    def test_flush_writes_pending_value(self, fake_scheduler) -> None:
        store = InMemoryPreferenceStore()
        resolver = ThemeResolver(
            store,
            ManualSystemScheme(),
            scheduler=fake_scheduler,
            persist_delay_seconds=1.0,
        )

        resolver.set_theme("light")
        resolver.close()

        assert store.get("theme") == "light"
        assert fake_scheduler.pending == []

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValueError):
            ThemeResolver(InMemoryPreferenceStore(), ManualSystemScheme(), persist_delay_seconds=-1)


def test_create_theme_resolver_uses_configured_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "prefs.json"
    monkeypatch.setattr(settings.app, "theme_store_path", str(path))

    resolver = create_theme_resolver(ManualSystemScheme())
    resolver.set_theme("dark")

    reloaded = create_theme_resolver(ManualSystemScheme())
    assert reloaded.preference == "dark"
    assert JsonFilePreferenceStore(path).get(settings.app.theme_storage_key) == "dark"


def test_set_theme_recovers_from_corrupt_file(tmp_path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")

    resolver = ThemeResolver(JsonFilePreferenceStore(path), ManualSystemScheme())
    assert resolver.preference == "system"

    resolver.set_theme("dark")

    fresh = ThemeResolver(JsonFilePreferenceStore(path), ManualSystemScheme())
    assert fresh.preference == "dark"
