"""Preference persistence and system color-scheme adapters."""

from adsdash.adapters.preferences.base import AbstractPreferenceStore
from adsdash.adapters.preferences.in_memory import InMemoryPreferenceStore
from adsdash.adapters.preferences.json_file import JsonFilePreferenceStore
from adsdash.adapters.preferences.system_scheme import (
    AbstractSystemSchemeSource,
    ManualSystemScheme,
)

__all__ = [
    "AbstractPreferenceStore",
    "AbstractSystemSchemeSource",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "ManualSystemScheme",
]
