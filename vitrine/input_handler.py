"""Input Handler - maps raylib input events to commands.

Polls keyboard and mouse once per frame and returns the commands to execute
against the Viewer, in order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List

if TYPE_CHECKING:
    from .viewer import Viewer

from . import config as cfg
from .commands import (
    Command,
    OpenCategory, OpenEntry,
    NavigateNext, NavigatePrev,
    Escape, CloseView,
    WheelZoom, StartDrag, UpdateDrag, EndDrag,
    ToggleFullscreen, GridScroll,
    CloseApp,
)
from .layout import close_button_rect, hit_test, level_tiles, nav_button_rects, viewer_container
from .rl_compat import rl
from .state import ViewLevel
from .viewer import Key


@dataclass
class MouseState:
    """Current mouse state snapshot."""
    x: float = 0.0
    y: float = 0.0
    left_pressed: bool = False
    left_released: bool = False
    left_down: bool = False
    wheel: float = 0.0
    on_screen: bool = True


@dataclass
class InputHandler:
    """Handles input polling and command generation."""

    # Key bindings
    key_map: Dict[int, Key] = field(default_factory=lambda: {
        rl.KEY_ESCAPE: Key.ESCAPE,
        rl.KEY_LEFT: Key.ARROW_LEFT,
        rl.KEY_RIGHT: Key.ARROW_RIGHT,
        rl.KEY_F: Key.FULLSCREEN,
    })
    key_quit: int = rl.KEY_Q

    def poll_mouse(self) -> MouseState:
        pos = rl.GetMousePosition()
        return MouseState(
            x=pos.x,
            y=pos.y,
            left_pressed=rl.IsMouseButtonPressed(rl.MOUSE_BUTTON_LEFT),
            left_released=rl.IsMouseButtonReleased(rl.MOUSE_BUTTON_LEFT),
            left_down=rl.IsMouseButtonDown(rl.MOUSE_BUTTON_LEFT),
            wheel=rl.GetMouseWheelMove(),
            on_screen=rl.IsCursorOnScreen(),
        )

    def pressed_keys(self) -> List[Key]:
        return [key for code, key in self.key_map.items() if rl.IsKeyPressed(code)]

    def key_commands(self, keys: List[Key]) -> List[Command]:
        """Keyboard contract: escape, arrows and the fullscreen toggle."""
        commands: List[Command] = []
        for key in keys:
            if key is Key.ESCAPE:
                commands.append(Escape())
            elif key is Key.ARROW_RIGHT:
                commands.append(NavigateNext())
            elif key is Key.ARROW_LEFT:
                commands.append(NavigatePrev())
            elif key is Key.FULLSCREEN:
                commands.append(ToggleFullscreen())
        return commands

    def _media_commands(self, viewer: "Viewer", mouse: MouseState) -> List[Command]:
        """Mouse over a shown media item: close, prev/next, zoom and drag."""
        commands: List[Command] = []
        win = viewer.state.window
        container = viewer_container(win.screen_w, win.screen_h, win.is_fullscreen)
        inside = mouse.on_screen and container.contains(mouse.x, mouse.y)

        if mouse.left_pressed:
            if close_button_rect(win.screen_w).contains(mouse.x, mouse.y):
                commands.append(CloseView())
                return commands
            if viewer.level is ViewLevel.ITEM and viewer.state.nav.count > 1 and not win.is_fullscreen:
                prev_btn, next_btn = nav_button_rects(win.screen_w, win.screen_h)
                if prev_btn.contains(mouse.x, mouse.y):
                    commands.append(NavigatePrev())
                    return commands
                if next_btn.contains(mouse.x, mouse.y):
                    commands.append(NavigateNext())
                    return commands
            if inside:
                commands.append(StartDrag(mouse.x, mouse.y))

        if viewer.state.input.is_dragging:
            # Leaving the container ends the drag like a release
            if not inside or mouse.left_released or not mouse.left_down:
                commands.append(EndDrag())
            else:
                commands.append(UpdateDrag(mouse.x, mouse.y))

        if mouse.wheel != 0.0:
            commands.append(WheelZoom(delta=mouse.wheel))
        return commands

    def _listing_commands(self, viewer: "Viewer", mouse: MouseState) -> List[Command]:
        """Mouse over the grid or a folder listing: tiles, close and scroll."""
        commands: List[Command] = []
        state = viewer.state

        if mouse.left_pressed:
            if (viewer.level is ViewLevel.FOLDER and
                    close_button_rect(state.window.screen_w).contains(mouse.x, mouse.y)):
                commands.append(CloseView())
                return commands
            index = hit_test(level_tiles(state), mouse.x, mouse.y)
            if index is not None and mouse.y >= cfg.GRID_HEADER_HEIGHT:
                if viewer.level is ViewLevel.GRID:
                    commands.append(OpenCategory(index))
                else:
                    commands.append(OpenEntry(index))

        if mouse.wheel != 0.0:
            commands.append(GridScroll(delta=-mouse.wheel * cfg.GRID_SCROLL_STEP))
        return commands

    def poll(self, viewer: "Viewer") -> List[Command]:
        """Poll all inputs and return list of commands to execute."""
        if rl.IsKeyPressed(self.key_quit):
            return [CloseApp()]

        commands = self.key_commands(self.pressed_keys())
        mouse = self.poll_mouse()
        if viewer.state.nav.shows_media:
            commands.extend(self._media_commands(viewer, mouse))
        else:
            commands.extend(self._listing_commands(viewer, mouse))
        return commands
