import pytest

from vitrine import config as cfg
from vitrine.layout import (
    content_height, cover_rect, fit_rect, hit_test, level_columns, level_scroll_max, level_tiles,
    scroll_max, tile_rects, tile_width, viewer_container,
)
from vitrine.state import ViewerState, ViewLevel
from vitrine.types import Rect


def test_tile_rects_rows_and_columns():
    rects = tile_rects(5, 1000, 3)
    tw = tile_width(1000, 3)
    assert len(rects) == 5
    assert rects[0].x == cfg.GRID_MARGIN
    assert rects[1].x == pytest.approx(cfg.GRID_MARGIN + tw + cfg.GRID_GAP)
    assert rects[3].y == pytest.approx(rects[0].y + cfg.GRID_TILE_HEIGHT + cfg.GRID_GAP)
    assert rects[3].x == rects[0].x
    assert rects[2].x + rects[2].w == pytest.approx(1000 - cfg.GRID_MARGIN)


def test_scroll_moves_tiles_up():
    assert tile_rects(1, 1000, 3, scroll=50)[0].y == tile_rects(1, 1000, 3)[0].y - 50


def test_content_height_and_scroll_max():
    base = cfg.GRID_HEADER_HEIGHT + 2 * cfg.GRID_MARGIN
    assert content_height(0, 3) == base
    assert content_height(3, 3) == base + cfg.GRID_TILE_HEIGHT
    assert content_height(4, 3) == base + 2 * cfg.GRID_TILE_HEIGHT + cfg.GRID_GAP
    assert scroll_max(1, 3, 10_000) == 0.0
    assert scroll_max(4, 3, 100) == content_height(4, 3) - 100


def test_hit_test():
    rects = [Rect(0, 0, 10, 10), Rect(20, 0, 10, 10)]
    assert hit_test(rects, 5, 5) == 0
    assert hit_test(rects, 25, 5) == 1
    assert hit_test(rects, 15, 5) is None


def test_viewer_container():
    full = viewer_container(800, 600, fullscreen=True)
    assert full == Rect(0, 0, 800, 600)
    windowed = viewer_container(800, 600)
    assert windowed.x > 0 and windowed.y > 0
    assert windowed.x + windowed.w <= 800
    assert windowed.y + windowed.h <= 600 - cfg.VIEWER_NAV_HEIGHT


def test_fit_rect_keeps_aspect_and_centers():
    container = Rect(0, 0, 800, 600)
    r = fit_rect(1600, 600, container)
    assert (r.w, r.h) == (800, 300)
    assert r.center == container.center
    small = fit_rect(100, 50, container)
    assert (small.w, small.h) == (100, 50)


def test_cover_rect_crops_to_tile_aspect(monkeypatch):
    monkeypatch.setattr(cfg, "MAINTAIN_ASPECT_RATIO", False)
    tile = Rect(0, 0, 200, 100)
    src, dst = cover_rect(400, 400, tile)
    assert dst == tile
    assert (src.w, src.h) == (400, 200)
    assert src.y == 100

    monkeypatch.setattr(cfg, "MAINTAIN_ASPECT_RATIO", True)
    src, dst = cover_rect(400, 400, tile)
    assert src == Rect(0, 0, 400, 400)
    assert (dst.w, dst.h) == (100, 100)


def test_level_columns_reads_overrides(monkeypatch):
    monkeypatch.setattr(cfg, "GRID_COLUMNS", 5)
    monkeypatch.setattr(cfg, "FOLDER_COLUMNS", 4)
    assert level_columns(ViewLevel.GRID) == 5
    assert level_columns(ViewLevel.FOLDER) == 4


def test_level_tiles(abc_category, single_category):
    state = ViewerState(categories=[abc_category, single_category])
    state.window.screen_w, state.window.screen_h = 1200, 200
    assert len(level_tiles(state)) == 2

    state.nav.level = ViewLevel.FOLDER
    state.nav.category = abc_category
    assert len(level_tiles(state)) == 3
    assert level_scroll_max(state) == scroll_max(3, cfg.FOLDER_COLUMNS, 200)

    state.nav.category = single_category
    assert level_tiles(state) == []
