"""Composite ViewerState - combines all sub-states of one viewer session."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .navigation import NavigationState, ViewLevel
from .view import ViewState
from .input import InputState
from .window import WindowState
from .loading import LoadingState
from ..types import Category, Entry, ViewParams


@dataclass
class ViewerState:
    """
    Composite viewer state.

    Sub-states are used directly by the state machine and the renderer:
        state.nav.level
        state.view_state.view
        state.window.container_w

    Shortcuts exist for the fields read on every frame.
    """
    categories: List[Category] = field(default_factory=list)
    nav: NavigationState = field(default_factory=NavigationState)
    view_state: ViewState = field(default_factory=ViewState)
    input: InputState = field(default_factory=InputState)
    window: WindowState = field(default_factory=WindowState)
    loading: LoadingState = field(default_factory=LoadingState)

    @property
    def level(self) -> ViewLevel:
        return self.nav.level

    @property
    def category(self) -> Optional[Category]:
        return self.nav.category

    @property
    def entry(self) -> Optional[Entry]:
        return self.nav.entry

    @property
    def index(self) -> int:
        return self.nav.index

    @property
    def view(self) -> ViewParams:
        return self.view_state.view

    @view.setter
    def view(self, value: ViewParams):
        self.view_state.view = value

    @property
    def zoom(self) -> float:
        return self.view_state.zoom

    @property
    def is_fullscreen(self) -> bool:
        return self.window.is_fullscreen

    def reset_view(self) -> None:
        """Zoom 1, centered, not dragging."""
        self.view_state.reset()
        self.input.end_drag()
