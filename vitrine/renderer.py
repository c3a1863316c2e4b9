"""Renderer - handles all drawing operations.

The Renderer only reads viewer state and draws to screen. Texture requests
made while drawing queue loads in the caches but never change viewer state.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import os

if TYPE_CHECKING:
    from .media_loader import TextureCache
    from .state import ViewerState

from . import config as cfg
from .classifier import classify
from .layout import (
    close_button_rect, cover_rect, fit_rect, level_tiles, nav_button_rects, viewer_container,
)
from .logging import now
from .paths import join_public
from .rl_compat import (
    rl, make_rect as RL_Rect, make_vec2 as RL_V2, make_color as RL_Color,
    draw_text as RL_DrawText, measure_text as RL_MeasureText, is_texture_valid,
)
from .state import ViewLevel
from .thumbnails import resolve_thumbnail
from .types import Entry, EntryType, LoadPriority, Rect, TextureInfo
from .view_math import media_rect

BG = (18, 18, 20)
TILE_BG = (40, 40, 44)
TEXT = (235, 235, 235)
TEXT_DIM = (150, 150, 155)


@dataclass
class Renderer:
    """
    Handles all drawing operations.

    Usage:
        renderer = Renderer(tiles=tile_cache, full=full_cache)
        renderer.draw_frame(viewer.state)
    """
    tiles: "TextureCache"
    full: "TextureCache"

    def begin_frame(self) -> None:
        rl.BeginDrawing()

    def end_frame(self) -> None:
        rl.EndDrawing()

    def draw_background(self) -> None:
        rl.ClearBackground(RL_Color(*BG))

    # ═══════════════════════════════════════════════════════════════════════
    # Primitives
    # ═══════════════════════════════════════════════════════════════════════

    def draw_texture_in(self, ti: TextureInfo, src: Rect, dst: Rect) -> None:
        if not is_texture_valid(ti.tex):
            return
        # Source rect is in original pixels; the texture may be downscaled
        sx = ti.tex.width / ti.w if ti.w else 1.0
        sy = ti.tex.height / ti.h if ti.h else 1.0
        rl.DrawTexturePro(
            ti.tex,
            RL_Rect(src.x * sx, src.y * sy, src.w * sx, src.h * sy),
            RL_Rect(dst.x, dst.y, dst.w, dst.h),
            RL_V2(0, 0), 0.0, rl.WHITE,
        )

    def draw_centered_text(self, text: str, cx: float, cy: float, size: int, color=TEXT) -> None:
        w = RL_MeasureText(text, size)
        RL_DrawText(text, int(cx - w / 2), int(cy - size / 2), size, RL_Color(*color))

    def draw_fitted_text(self, text: str, x: float, y: float, max_w: float, size: int, color=TEXT) -> None:
        """Draw text, trimming the end with an ellipsis if wider than max_w."""
        if RL_MeasureText(text, size) > max_w:
            while text and RL_MeasureText(text + "...", size) > max_w:
                text = text[:-1]
            text += "..."
        RL_DrawText(text, int(x), int(y), size, RL_Color(*color))

    def draw_spinner(self, cx: float, cy: float, radius: float = 28) -> None:
        angle = (now() * 2.5 * 360.0) % 360.0
        rl.DrawRing(RL_V2(cx, cy), radius - 5, radius, angle, angle + 90, 32,
                    RL_Color(255, 255, 255, 220))

    # ═══════════════════════════════════════════════════════════════════════
    # Grid and folder listing
    # ═══════════════════════════════════════════════════════════════════════

    def _tile_texture_path(self, state: "ViewerState", index: int) -> str:
        if state.level is ViewLevel.GRID:
            return resolve_thumbnail(state.categories[index])
        entry: Entry = state.category.entries[index]
        if entry.type.is_folder:
            if entry.images:
                return join_public(state.category.path, entry.name, entry.images[0])
            return cfg.PLACEHOLDER_PATH
        return entry.path

    def _tile_label(self, state: "ViewerState", index: int) -> str:
        if state.level is ViewLevel.GRID:
            cat = state.categories[index]
            return f"{cat.name} ({len(cat.entries)})"
        entry = state.category.entries[index]
        if entry.type.is_folder:
            return f"{entry.name}/ ({len(entry.images or ())})"
        return entry.name

    def draw_tile(self, state: "ViewerState", index: int, rect: Rect) -> None:
        rl.DrawRectangle(int(rect.x), int(rect.y), int(rect.w), int(rect.h), RL_Color(*TILE_BG))
        path = self._tile_texture_path(state, index)
        label_h = cfg.FONT_SIZE + 12
        image_area = Rect(rect.x, rect.y, rect.w, rect.h - label_h)

        if classify(path).is_zoomable and path != cfg.PLACEHOLDER_PATH:
            ti = self.tiles.get(path, LoadPriority.TILE)
            if ti is not None:
                src, dst = cover_rect(ti.w, ti.h, image_area)
                self.draw_texture_in(ti, src, dst)
            elif self.tiles.is_loading(path):
                self.draw_spinner(*image_area.center, radius=16)
        else:
            label = "VIDEO" if classify(path) is EntryType.VIDEO else "EMPTY"
            self.draw_centered_text(label, *image_area.center, cfg.FONT_SIZE, TEXT_DIM)

        self.draw_fitted_text(self._tile_label(state, index), rect.x + 8,
                              rect.y + rect.h - label_h + 6, rect.w - 16, cfg.FONT_SIZE)

    def draw_listing(self, state: "ViewerState") -> None:
        """Grid of categories or the entries of the open category."""
        sw, sh = state.window.size
        rects = level_tiles(state)
        for i, rect in enumerate(rects):
            if rect.y + rect.h < cfg.GRID_HEADER_HEIGHT or rect.y > sh:
                continue
            self.draw_tile(state, i, rect)

        # Header drawn last so scrolled tiles pass under it
        rl.DrawRectangle(0, 0, sw, cfg.GRID_HEADER_HEIGHT, RL_Color(*BG))
        title = cfg.WINDOW_TITLE if state.level is ViewLevel.GRID else state.category.name
        RL_DrawText(title, cfg.GRID_MARGIN, (cfg.GRID_HEADER_HEIGHT - cfg.TITLE_FONT_SIZE) // 2,
                    cfg.TITLE_FONT_SIZE, RL_Color(*TEXT))

        if state.level is ViewLevel.GRID:
            if state.loading.loading:
                self.draw_spinner(sw / 2, sh / 2)
                self.draw_centered_text("Loading...", sw / 2, sh / 2 + 60, cfg.FONT_SIZE)
            elif not state.categories:
                msg = "No media found" if state.loading.error is None else "Could not load gallery"
                self.draw_centered_text(msg, sw / 2, sh / 2, cfg.FONT_SIZE, TEXT_DIM)
        else:
            if not state.category.entries:
                self.draw_centered_text("Empty", sw / 2, sh / 2, cfg.FONT_SIZE, TEXT_DIM)
            self.draw_close_button(state)

    # ═══════════════════════════════════════════════════════════════════════
    # Item viewer
    # ═══════════════════════════════════════════════════════════════════════

    def draw_media(self, state: "ViewerState") -> None:
        """The media item on screen, fitted to the container, then zoomed and panned."""
        sw, sh = state.window.size
        container = viewer_container(sw, sh, state.is_fullscreen)
        path = state.nav.current_path
        if path is None:
            self.draw_centered_text("Empty folder", *container.center, cfg.FONT_SIZE, TEXT_DIM)
            return

        if not classify(path).is_zoomable:
            # No decoding for video
            rl.DrawRectangleLines(int(container.x), int(container.y), int(container.w),
                                  int(container.h), RL_Color(*TEXT_DIM))
            cx, cy = container.center
            self.draw_centered_text("Video", cx, cy - cfg.FONT_SIZE, cfg.TITLE_FONT_SIZE)
            self.draw_centered_text(os.path.basename(path), cx, cy + cfg.FONT_SIZE,
                                    cfg.FONT_SIZE, TEXT_DIM)
            return

        ti = self.full.get(path, LoadPriority.CURRENT)
        if ti is None:
            # Show the tile texture while the full one decodes
            ti = self.tiles.get(path, LoadPriority.CURRENT) if path in self.tiles else None
        if ti is None:
            if self.full.has_failed(path):
                self.draw_centered_text("Could not load " + os.path.basename(path),
                                        *container.center, cfg.FONT_SIZE, TEXT_DIM)
            else:
                self.draw_spinner(*container.center)
            return

        fit = fit_rect(ti.w, ti.h, container)
        dst = media_rect(fit, state.view, container)
        rl.BeginScissorMode(int(container.x), int(container.y), int(container.w), int(container.h))
        self.draw_texture_in(ti, Rect(0, 0, ti.w, ti.h), dst)
        rl.EndScissorMode()

    def draw_nav_bar(self, state: "ViewerState") -> None:
        """Counter "i / n" with prev/next buttons when there is more than one item."""
        if state.is_fullscreen or state.level is not ViewLevel.ITEM:
            return
        count = state.nav.count
        if count <= 1:
            return
        sw, sh = state.window.size
        prev_btn, next_btn = nav_button_rects(sw, sh)
        for btn, arrow in ((prev_btn, "<"), (next_btn, ">")):
            rl.DrawRectangleRounded(RL_Rect(btn.x, btn.y, btn.w, btn.h), 0.3, 8, RL_Color(*TILE_BG))
            self.draw_centered_text(arrow, *btn.center, cfg.TITLE_FONT_SIZE)
        counter = f"{state.index + 1} / {count}"
        self.draw_centered_text(counter, sw / 2, prev_btn.center[1], cfg.FONT_SIZE)

    def draw_close_button(self, state: "ViewerState") -> None:
        r = close_button_rect(state.window.screen_w)
        cx, cy = r.center
        radius = r.w / 2
        rl.DrawCircle(int(cx), int(cy), radius, RL_Color(0, 0, 0, 160))
        rl.DrawCircleLines(int(cx), int(cy), radius, RL_Color(255, 255, 255, 230))
        cross = radius * 0.5
        color = RL_Color(255, 255, 255, 230)
        rl.DrawLineEx(RL_V2(cx - cross, cy - cross), RL_V2(cx + cross, cy + cross), 2.0, color)
        rl.DrawLineEx(RL_V2(cx + cross, cy - cross), RL_V2(cx - cross, cy + cross), 2.0, color)

    def draw_caption(self, state: "ViewerState") -> None:
        path = state.nav.current_path
        if path is None or state.is_fullscreen:
            return
        name = os.path.basename(path)
        RL_DrawText(name, cfg.GRID_MARGIN, cfg.CLOSE_BTN_MARGIN + 6, cfg.FONT_SIZE, RL_Color(*TEXT_DIM))

    # ═══════════════════════════════════════════════════════════════════════
    # Frame
    # ═══════════════════════════════════════════════════════════════════════

    def draw_all(self, state: "ViewerState") -> None:
        self.draw_background()
        if state.nav.shows_media:
            self.draw_media(state)
            self.draw_caption(state)
            self.draw_nav_bar(state)
            self.draw_close_button(state)
        else:
            self.draw_listing(state)

    def draw_frame(self, state: "ViewerState") -> None:
        """Complete frame: begin, draw all, end."""
        self.begin_frame()
        self.draw_all(state)
        self.end_frame()
