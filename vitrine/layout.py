"""Pure layout geometry for the grid, folder listing and item viewer."""

from __future__ import annotations
import math
from typing import List, Optional, Tuple

from . import config as cfg
from .state import ViewerState, ViewLevel
from .types import Rect


def tile_width(screen_w: float, columns: int) -> float:
    """Width of one tile for a column count, after margins and gaps."""
    columns = max(1, columns)
    usable = screen_w - 2 * cfg.GRID_MARGIN - (columns - 1) * cfg.GRID_GAP
    return max(1.0, usable / columns)


def tile_rects(count: int, screen_w: float, columns: int, scroll: float = 0.0) -> List[Rect]:
    """Screen rectangles of count tiles laid out row by row.

    Tiles start below the header and move up by the scroll offset.
    """
    columns = max(1, columns)
    tw = tile_width(screen_w, columns)
    th = cfg.GRID_TILE_HEIGHT
    top = cfg.GRID_HEADER_HEIGHT + cfg.GRID_MARGIN - scroll
    rects: List[Rect] = []
    for i in range(count):
        row, col = divmod(i, columns)
        x = cfg.GRID_MARGIN + col * (tw + cfg.GRID_GAP)
        y = top + row * (th + cfg.GRID_GAP)
        rects.append(Rect(x, y, tw, th))
    return rects


def content_height(count: int, columns: int) -> float:
    """Total height of the tile area including header and margins."""
    rows = math.ceil(count / max(1, columns)) if count > 0 else 0
    if rows == 0:
        return float(cfg.GRID_HEADER_HEIGHT + 2 * cfg.GRID_MARGIN)
    return float(cfg.GRID_HEADER_HEIGHT + 2 * cfg.GRID_MARGIN
                 + rows * cfg.GRID_TILE_HEIGHT + (rows - 1) * cfg.GRID_GAP)


def scroll_max(count: int, columns: int, screen_h: float) -> float:
    """Largest scroll offset that still keeps the last row on screen."""
    return max(0.0, content_height(count, columns) - screen_h)


def hit_test(rects: List[Rect], x: float, y: float) -> Optional[int]:
    """Index of the tile under the point, or None."""
    for i, r in enumerate(rects):
        if r.contains(x, y):
            return i
    return None


def viewer_container(screen_w: float, screen_h: float, fullscreen: bool = False) -> Rect:
    """Area the shown media is fitted into.

    Windowed, the container is inset by a margin and leaves room for the
    navigation bar at the bottom. Fullscreen uses the whole screen.
    """
    if fullscreen:
        return Rect(0.0, 0.0, float(screen_w), float(screen_h))
    mx = screen_w * cfg.VIEWER_MARGIN_FRAC
    my = screen_h * cfg.VIEWER_MARGIN_FRAC
    w = max(1.0, screen_w - 2 * mx)
    h = max(1.0, screen_h - 2 * my - cfg.VIEWER_NAV_HEIGHT)
    return Rect(mx, my, w, h)


def fit_rect(img_w: float, img_h: float, container: Rect) -> Rect:
    """Largest rectangle with the image aspect that fits the container, centered.

    Small images are not upscaled.
    """
    if img_w <= 0 or img_h <= 0:
        return Rect(container.x, container.y, 0.0, 0.0)
    scale = min(container.w / img_w, container.h / img_h, 1.0)
    w = img_w * scale
    h = img_h * scale
    cx, cy = container.center
    return Rect(cx - w / 2.0, cy - h / 2.0, w, h)


def cover_rect(img_w: float, img_h: float, tile: Rect) -> Tuple[Rect, Rect]:
    """Source and destination rectangles that fill a tile.

    With MAINTAIN_ASPECT_RATIO the image is letterboxed inside the tile and
    the full source is used. Otherwise the source is cropped around its center
    to the tile aspect.
    """
    if img_w <= 0 or img_h <= 0:
        return Rect(0.0, 0.0, 0.0, 0.0), tile
    if cfg.MAINTAIN_ASPECT_RATIO:
        scale = min(tile.w / img_w, tile.h / img_h)
        w = img_w * scale
        h = img_h * scale
        cx, cy = tile.center
        return Rect(0.0, 0.0, img_w, img_h), Rect(cx - w / 2.0, cy - h / 2.0, w, h)

    tile_aspect = tile.w / tile.h
    if img_w / img_h > tile_aspect:
        sw = img_h * tile_aspect
        return Rect((img_w - sw) / 2.0, 0.0, sw, img_h), tile
    sh = img_w / tile_aspect
    return Rect(0.0, (img_h - sh) / 2.0, img_w, sh), tile


def close_button_rect(screen_w: float) -> Rect:
    size = cfg.CLOSE_BTN_SIZE
    return Rect(screen_w - size - cfg.CLOSE_BTN_MARGIN, cfg.CLOSE_BTN_MARGIN, size, size)


def nav_button_rects(screen_w: float, screen_h: float) -> Tuple[Rect, Rect]:
    """Prev and next buttons in the navigation bar under the container."""
    h = cfg.VIEWER_NAV_HEIGHT * 0.8
    w = h * 1.6
    y = screen_h - cfg.VIEWER_NAV_HEIGHT - screen_h * cfg.VIEWER_MARGIN_FRAC / 2.0
    cx = screen_w / 2.0
    gap = w * 1.5
    return Rect(cx - gap - w, y, w, h), Rect(cx + gap, y, w, h)


def level_columns(level: ViewLevel) -> int:
    """Column count for the grid or a folder listing. Read dynamically so CLI overrides apply."""
    return cfg.FOLDER_COLUMNS if level is ViewLevel.FOLDER else cfg.GRID_COLUMNS


def level_tiles(state: ViewerState) -> List[Rect]:
    """Tile rectangles for whatever listing is on screen, or [] while media is shown."""
    nav = state.nav
    if nav.shows_media:
        return []
    if nav.level is ViewLevel.GRID:
        count = len(state.categories)
    elif nav.category is not None:
        count = len(nav.category.entries)
    else:
        return []
    return tile_rects(count, state.window.screen_w, level_columns(nav.level), state.window.grid_scroll)


def level_scroll_max(state: ViewerState) -> float:
    nav = state.nav
    if nav.level is ViewLevel.GRID:
        count = len(state.categories)
    elif nav.category is not None:
        count = len(nav.category.entries)
    else:
        count = 0
    return scroll_max(count, level_columns(nav.level), state.window.screen_h)
