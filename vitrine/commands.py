"""Command Pattern for input handling.

Input backends turn raw events into commands; the application executes them
against the Viewer. can_execute() holds the guards, execute() applies the
transition and returns True if anything changed.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .viewer import Viewer

from .logging import log
from .state import ViewLevel


class Command(ABC):
    """Base class for all commands."""

    @abstractmethod
    def execute(self, viewer: "Viewer") -> bool:
        """Execute the command. Returns True if action was taken."""
        pass

    def can_execute(self, viewer: "Viewer") -> bool:
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Navigation Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OpenCategory(Command):
    """Open a category tile from the grid."""
    index: int

    def can_execute(self, viewer: "Viewer") -> bool:
        return (viewer.level is ViewLevel.GRID and
                0 <= self.index < len(viewer.state.categories))

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        category = viewer.state.categories[self.index]
        log(f"[CMD] OpenCategory: {self.index} ({category.name})")
        return viewer.open_category(category)


@dataclass
class OpenEntry(Command):
    """Open an entry of the current category."""
    index: int

    def can_execute(self, viewer: "Viewer") -> bool:
        category = viewer.state.category
        return (viewer.level is ViewLevel.FOLDER and
                category is not None and
                not viewer.state.nav.is_auto_expanded and
                0 <= self.index < len(category.entries))

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        entry = viewer.state.category.entries[self.index]
        log(f"[CMD] OpenEntry: {self.index} ({entry.name})")
        return viewer.open_entry(entry)


class NavigateNext(Command):
    """Next item, wrapping at the end."""

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.level is ViewLevel.ITEM and viewer.state.nav.count > 1

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] NavigateNext: {viewer.state.index}")
        return viewer.next()


class NavigatePrev(Command):
    """Previous item, wrapping at the start."""

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.level is ViewLevel.ITEM and viewer.state.nav.count > 1

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] NavigatePrev: {viewer.state.index}")
        return viewer.prev()


class Escape(Command):
    """Escape key: leave fullscreen, otherwise go up one level."""

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.level is not ViewLevel.GRID

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] Escape: level={viewer.level.name} fullscreen={viewer.state.is_fullscreen}")
        return viewer.escape()


class CloseView(Command):
    """Close button."""

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.level is not ViewLevel.GRID

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] CloseView: level={viewer.level.name}")
        return viewer.close()


# ═══════════════════════════════════════════════════════════════════════════
# Zoom / Pan Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class WheelZoom(Command):
    """Zoom with mouse wheel."""
    delta: float  # Positive = zoom in, negative = zoom out

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.zoom_enabled and self.delta != 0

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        before = viewer.state.zoom
        changed = viewer.wheel(self.delta)
        log(f"[CMD] WheelZoom: delta={self.delta:+.2f} zoom {before:.2f} -> {viewer.state.zoom:.2f}")
        return changed


@dataclass
class StartDrag(Command):
    """Start dragging the zoomed media."""
    x: float
    y: float

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.zoom_enabled and viewer.state.view_state.is_zoomed

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] StartDrag: ({self.x:.0f}, {self.y:.0f})")
        return viewer.pointer_down(self.x, self.y)


@dataclass
class UpdateDrag(Command):
    """Move the pointer during a drag."""
    x: float
    y: float

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.state.input.is_dragging

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        return viewer.pointer_move(self.x, self.y)


class EndDrag(Command):
    """Release the pointer, or the pointer left the view."""

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.state.input.is_dragging

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log("[CMD] EndDrag")
        return viewer.pointer_up()


class ToggleFullscreen(Command):
    """Toggle fullscreen for the shown image or gif."""

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.zoom_enabled

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] ToggleFullscreen: currently {viewer.state.is_fullscreen}")
        return viewer.toggle_fullscreen()


# ═══════════════════════════════════════════════════════════════════════════
# Grid Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class GridScroll(Command):
    """Scroll the grid or folder listing. Positive delta scrolls down."""
    delta: float

    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.level is not ViewLevel.ITEM or not viewer.state.nav.shows_media

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        return viewer.scroll_grid(self.delta)


# ═══════════════════════════════════════════════════════════════════════════
# App Control Commands
# ═══════════════════════════════════════════════════════════════════════════

class CloseApp(Command):
    """Close the application. The main loop stops on it."""

    def execute(self, viewer: "Viewer") -> bool:
        log("[CMD] CloseApp")
        return True


def execute_all(commands: List[Command], viewer: "Viewer") -> bool:
    """Run commands in order. Returns True if any of them took effect."""
    changed = False
    for cmd in commands:
        if cmd.execute(viewer):
            changed = True
    return changed
