"""View state - zoom factor and pan offset of the open media."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from ..config import ZOOM_DEFAULT
from ..types import ViewParams


@dataclass
class ViewState:
    """State for view/zoom parameters."""
    view: ViewParams = field(default_factory=ViewParams)

    @property
    def zoom(self) -> float:
        """Current zoom factor."""
        return self.view.zoom

    @property
    def pan(self) -> Tuple[float, float]:
        """Current pan offset."""
        return self.view.pan

    @property
    def is_zoomed(self) -> bool:
        return self.view.zoom > 1.0

    def reset(self) -> None:
        """Back to unzoomed, centered."""
        self.view = ViewParams(zoom=ZOOM_DEFAULT)
