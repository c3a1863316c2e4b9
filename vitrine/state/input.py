"""Input state - pointer dragging."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class InputState:
    """State for pointer drag handling."""
    is_dragging: bool = False
    drag_origin: Tuple[float, float] = (0.0, 0.0)

    def start_drag(self, origin: Tuple[float, float]) -> None:
        """Start dragging from an anchor (pointer minus pan)."""
        self.is_dragging = True
        self.drag_origin = origin

    def end_drag(self) -> bool:
        """End dragging. Returns True if was dragging."""
        was_dragging = self.is_dragging
        self.is_dragging = False
        return was_dragging
