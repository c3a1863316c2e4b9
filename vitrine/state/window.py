"""Window state - container size, fullscreen mirror, grid scroll."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class WindowState:
    """Window-related state."""
    screen_w: int = 0
    screen_h: int = 0
    # Live size of the viewer container, used for pan bounds
    container_w: float = 0.0
    container_h: float = 0.0
    # Mirror of the platform flag, never authoritative
    is_fullscreen: bool = False
    grid_scroll: float = 0.0
    grid_scroll_max: float = 0.0

    @property
    def size(self) -> Tuple[int, int]:
        return (self.screen_w, self.screen_h)

    @property
    def container(self) -> Tuple[float, float]:
        return (self.container_w, self.container_h)
