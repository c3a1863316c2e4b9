"""Background scroll lock held while a media item covers the grid."""

from __future__ import annotations
from .logging import log
from .platform import Platform


class ScrollLock:
    """Guarded background-scroll suppression.

    acquire() is idempotent. release() always re-enables scrolling, even if
    the lock was never taken, so teardown paths can call it blindly.
    """

    def __init__(self, platform: Platform):
        self._platform = platform
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    def acquire(self) -> bool:
        """Suppress background scroll. Returns True if newly acquired."""
        if self._held:
            return False
        self._platform.set_background_scroll(False)
        self._held = True
        log("[LOCK] Background scroll locked")
        return True

    def release(self) -> None:
        was_held = self._held
        self._platform.set_background_scroll(True)
        self._held = False
        if was_held:
            log("[LOCK] Background scroll released")

    def sync(self, wanted: bool) -> None:
        """Acquire or release to match the wanted state."""
        if wanted:
            self.acquire()
        elif self._held:
            self.release()

