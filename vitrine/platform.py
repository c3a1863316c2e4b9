"""Platform boundary - fullscreen and background scroll owned by the host window."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, List

from .logging import log

FullscreenListener = Callable[[bool], None]


class Platform(ABC):
    """Host services the viewer depends on but does not own.

    Fullscreen is reported by the platform, never decided by the viewer:
    listeners are told about every change, whoever caused it.
    """

    def __init__(self):
        self._fullscreen_listeners: List[FullscreenListener] = []
        self.background_scroll_enabled: bool = True

    @abstractmethod
    def is_fullscreen(self) -> bool:
        """Actual fullscreen state of the host window."""

    @abstractmethod
    def request_fullscreen(self) -> None:
        """Ask the host to enter fullscreen. May be refused."""

    @abstractmethod
    def exit_fullscreen(self) -> None:
        """Ask the host to leave fullscreen."""

    def set_background_scroll(self, enabled: bool) -> None:
        self.background_scroll_enabled = enabled

    def add_fullscreen_listener(self, listener: FullscreenListener) -> None:
        self._fullscreen_listeners.append(listener)

    def remove_fullscreen_listener(self, listener: FullscreenListener) -> None:
        if listener in self._fullscreen_listeners:
            self._fullscreen_listeners.remove(listener)

    def notify_fullscreen_change(self) -> None:
        """Report the current fullscreen state to every listener."""
        value = self.is_fullscreen()
        log(f"[PLATFORM] Fullscreen changed: {value}")
        for listener in list(self._fullscreen_listeners):
            listener(value)
