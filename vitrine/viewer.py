"""Viewer state machine - grid, folder and item levels with zoom, pan and fullscreen.

Levels nest as GRID -> FOLDER(category) -> ITEM(entry, index). Every
transition is a total function over well-formed state: requests that do
not apply to the current level return False and change nothing.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional

from .classifier import classify
from .logging import log
from .math_utils import wrap_index
from .platform import Platform
from .scroll_lock import ScrollLock
from .state import ViewerState, ViewLevel
from .types import Category, Entry, EntryType
from .view_math import clamp_pan, drag_origin, dragged_view, wheel_view


class Key(Enum):
    """Keys the viewer reacts to, independent of the input backend."""
    ESCAPE = "Escape"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"
    FULLSCREEN = "F"


class Viewer:
    """Owns one ViewerState and applies every transition to it."""

    def __init__(self, platform: Platform, categories: Optional[List[Category]] = None):
        self.state = ViewerState(categories=list(categories or []))
        self.platform = platform
        self.scroll_lock = ScrollLock(platform)
        self.state.window.is_fullscreen = platform.is_fullscreen()
        platform.add_fullscreen_listener(self.on_fullscreen_change)

    def __enter__(self) -> Viewer:
        return self

    def __exit__(self, *exc) -> None:
        self.teardown()

    # ═══════════════════════════════════════════════════════════════════════
    # Derived state
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def level(self) -> ViewLevel:
        return self.state.nav.level

    @property
    def current_path(self) -> Optional[str]:
        return self.state.nav.current_path

    @property
    def current_type(self) -> Optional[EntryType]:
        """Media type of what is on screen, from its extension."""
        path = self.current_path
        if path is None:
            return None
        return classify(path)

    @property
    def zoom_enabled(self) -> bool:
        """Zoom and pan apply only to a shown image or gif."""
        ctype = self.current_type
        return self.state.nav.shows_media and ctype is not None and ctype.is_zoomable

    # ═══════════════════════════════════════════════════════════════════════
    # Data
    # ═══════════════════════════════════════════════════════════════════════

    def set_categories(self, categories: List[Category]) -> None:
        """Replace the tree snapshot. Any open view goes back to the grid."""
        self.state.categories = list(categories)
        if self.level is not ViewLevel.GRID:
            self._go_grid()
        log(f"[VIEW] Categories set: {len(self.state.categories)}")

    def set_container_size(self, width: float, height: float) -> None:
        """Record the live container size and re-apply the pan bounds."""
        self.state.window.container_w = float(width)
        self.state.window.container_h = float(height)
        self.state.view = clamp_pan(self.state.view, width, height)

    # ═══════════════════════════════════════════════════════════════════════
    # Navigation
    # ═══════════════════════════════════════════════════════════════════════

    def open_category(self, category: Category) -> bool:
        if self.level is not ViewLevel.GRID:
            return False
        nav = self.state.nav
        nav.level = ViewLevel.FOLDER
        nav.category = category
        nav.entry = None
        nav.index = 0
        self.state.window.grid_scroll = 0.0
        self.state.reset_view()
        self._sync_scroll_lock()
        log(f"[VIEW] Open category: {category.name} ({len(category.entries)} entries"
            + (", auto-expanded)" if nav.is_auto_expanded else ")"))
        return True

    def open_entry(self, entry: Entry) -> bool:
        nav = self.state.nav
        if self.level is not ViewLevel.FOLDER or nav.category is None:
            return False
        if entry not in nav.category.entries:
            return False

        if entry.type.is_folder:
            index = 0
        else:
            paths = [e.path for e in nav.category.media_entries]
            index = paths.index(entry.path)

        nav.level = ViewLevel.ITEM
        nav.entry = entry
        nav.index = index
        self.state.reset_view()
        self._sync_scroll_lock()
        log(f"[VIEW] Open entry: {entry.name} index={index}/{nav.count}")
        return True

    def next(self) -> bool:
        return self._step(1)

    def prev(self) -> bool:
        return self._step(-1)

    def _step(self, step: int) -> bool:
        nav = self.state.nav
        if self.level is not ViewLevel.ITEM:
            return False
        count = nav.count
        if count <= 1:
            return False
        old = nav.index
        nav.index = wrap_index(nav.index, step, count)
        self.state.reset_view()
        log(f"[VIEW] Step {step:+d}: {old} -> {nav.index} of {count}")
        return True

    def escape(self) -> bool:
        """Pop one level. Leaving fullscreen counts as the whole step."""
        if self.state.window.is_fullscreen:
            self._leave_fullscreen()
            return True
        return self._pop_level()

    def close(self) -> bool:
        """Close button: leave fullscreen if engaged, then pop one level."""
        if self.level is ViewLevel.GRID:
            return False
        if self.state.window.is_fullscreen:
            self._leave_fullscreen()
        return self._pop_level()

    def _pop_level(self) -> bool:
        nav = self.state.nav
        if self.level is ViewLevel.ITEM:
            nav.level = ViewLevel.FOLDER
            nav.entry = None
            nav.index = 0
            self.state.reset_view()
            self._sync_scroll_lock()
            log("[VIEW] Item -> folder")
            return True
        if self.level is ViewLevel.FOLDER:
            self._go_grid()
            log("[VIEW] Folder -> grid")
            return True
        return False

    def _go_grid(self) -> None:
        self.state.nav.reset()
        self.state.window.grid_scroll = 0.0
        self.state.reset_view()
        self._sync_scroll_lock()

    # ═══════════════════════════════════════════════════════════════════════
    # Zoom and pan
    # ═══════════════════════════════════════════════════════════════════════

    def wheel(self, delta: float) -> bool:
        """One wheel step. Positive delta zooms in."""
        if not self.zoom_enabled or delta == 0:
            return False
        w, h = self.state.window.container
        self.state.view = wheel_view(self.state.view, delta, w, h)
        if not self.state.view_state.is_zoomed:
            self.state.input.end_drag()
        return True

    def pointer_down(self, x: float, y: float) -> bool:
        """Start a drag. Only possible while zoomed in on an image or gif."""
        if not self.zoom_enabled or not self.state.view_state.is_zoomed:
            return False
        self.state.input.start_drag(drag_origin(self.state.view, x, y))
        return True

    def pointer_move(self, x: float, y: float) -> bool:
        inp = self.state.input
        if not inp.is_dragging or not self.zoom_enabled or not self.state.view_state.is_zoomed:
            return False
        w, h = self.state.window.container
        self.state.view = dragged_view(self.state.view, inp.drag_origin, x, y, w, h)
        return True

    def pointer_up(self) -> bool:
        return self.state.input.end_drag()

    def pointer_leave(self) -> bool:
        return self.state.input.end_drag()

    # ═══════════════════════════════════════════════════════════════════════
    # Fullscreen
    # ═══════════════════════════════════════════════════════════════════════

    def toggle_fullscreen(self) -> bool:
        """Ask the platform to flip fullscreen and mirror it optimistically."""
        if not self.zoom_enabled:
            return False
        if self.platform.is_fullscreen():
            self._leave_fullscreen()
        else:
            self.platform.request_fullscreen()
            self.state.window.is_fullscreen = True
            log("[VIEW] Fullscreen requested")
        return True

    def _leave_fullscreen(self) -> None:
        self.platform.exit_fullscreen()
        self.state.window.is_fullscreen = False
        log("[VIEW] Fullscreen exit requested")

    def on_fullscreen_change(self, is_fullscreen: bool) -> None:
        """Platform listener: the platform value always wins."""
        if self.state.window.is_fullscreen != is_fullscreen:
            log(f"[VIEW] Fullscreen resync: {self.state.window.is_fullscreen} -> {is_fullscreen}")
        self.state.window.is_fullscreen = is_fullscreen

    # ═══════════════════════════════════════════════════════════════════════
    # Keyboard and grid scroll
    # ═══════════════════════════════════════════════════════════════════════

    def handle_key(self, key: Key) -> bool:
        """Global keyboard contract. Returns True if the key was consumed."""
        if self.level is ViewLevel.GRID:
            return False
        if key is Key.ESCAPE:
            return self.escape()
        if key is Key.FULLSCREEN:
            return self.toggle_fullscreen()
        if self.level is ViewLevel.ITEM:
            if key is Key.ARROW_RIGHT:
                return self.next()
            if key is Key.ARROW_LEFT:
                return self.prev()
        return False

    def scroll_grid(self, delta: float) -> bool:
        """Scroll the grid or folder listing behind the viewer."""
        if not self.platform.background_scroll_enabled:
            return False
        win = self.state.window
        new = min(max(win.grid_scroll + delta, 0.0), max(win.grid_scroll_max, 0.0))
        if new == win.grid_scroll:
            return False
        win.grid_scroll = new
        return True

    # ═══════════════════════════════════════════════════════════════════════
    # Lifetime
    # ═══════════════════════════════════════════════════════════════════════

    def _sync_scroll_lock(self) -> None:
        self.scroll_lock.sync(self.state.nav.shows_media)

    def teardown(self) -> None:
        """Release everything the session holds, whatever state it is in."""
        self.state.input.end_drag()
        self.scroll_lock.release()
        self.platform.remove_fullscreen_listener(self.on_fullscreen_change)
        log("[VIEW] Teardown")
