"""Sources of the ambient "system prefers dark" signal."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

SchemeListener = Callable[[bool], None]


class AbstractSystemSchemeSource(ABC):
    """Reports whether the surrounding system prefers a dark color scheme."""

    @abstractmethod
    def prefers_dark(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def subscribe(self, listener: SchemeListener) -> Callable[[], None]:
        """Call ``listener(prefers_dark)`` whenever the signal changes.

        Returns:
            Callable that unsubscribes the listener.
        """
        raise NotImplementedError


class ManualSystemScheme(AbstractSystemSchemeSource):
    """Signal set explicitly, e.g. from a ``Sec-CH-Prefers-Color-Scheme`` hint."""

    def __init__(self, prefers_dark: bool = False) -> None:
        self._prefers_dark = prefers_dark
        self._listeners: list[SchemeListener] = []

    def prefers_dark(self) -> bool:
        return self._prefers_dark

    def set_prefers_dark(self, value: bool) -> None:
        if value == self._prefers_dark:
            return
        self._prefers_dark = value
        for listener in list(self._listeners):
            listener(value)

    def subscribe(self, listener: SchemeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
