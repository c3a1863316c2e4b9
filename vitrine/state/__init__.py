"""State management submodules for Vitrine."""

from .navigation import NavigationState, ViewLevel
from .view import ViewState
from .input import InputState
from .window import WindowState
from .loading import LoadingState
from .app_state import ViewerState

__all__ = [
    'NavigationState',
    'ViewLevel',
    'ViewState',
    'InputState',
    'WindowState',
    'LoadingState',
    'ViewerState',
]
