"""Platform implementation backed by the raylib window."""

from __future__ import annotations

from .platform import Platform
from .rl_compat import rl


class RaylibPlatform(Platform):
    """Fullscreen comes from the raylib window and is polled once per frame.

    Any change that does not match the last seen value is reported to the
    listeners, including changes the viewer did not request.
    """

    def __init__(self):
        super().__init__()
        self._last_fullscreen = bool(rl.IsWindowFullscreen())

    def is_fullscreen(self) -> bool:
        return bool(rl.IsWindowFullscreen())

    def request_fullscreen(self) -> None:
        if not self.is_fullscreen():
            rl.ToggleFullscreen()

    def exit_fullscreen(self) -> None:
        if self.is_fullscreen():
            rl.ToggleFullscreen()

    def poll(self) -> None:
        current = self.is_fullscreen()
        if current != self._last_fullscreen:
            self._last_fullscreen = current
            self.notify_fullscreen_change()
