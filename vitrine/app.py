"""Application - main loop orchestrator.

Each frame runs, in order:
- platform polling (fullscreen changes made outside the viewer)
- window and container size updates
- the remote gallery hand-over, if one is pending
- input handling (via InputHandler) and command execution
- texture uploads for finished decodes
- rendering (via Renderer)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import traceback

from . import config as cfg
from .commands import CloseApp, Command
from .input_handler import InputHandler
from .layout import level_scroll_max, viewer_container
from .logging import increment_frame, log, log_exception
from .media_loader import MediaSource, TextureCache
from .remote import GalleryFeed
from .renderer import Renderer
from .rl_compat import rl, texture_from_png
from .rl_platform import RaylibPlatform
from .tree_builder import GalleryBuildError, build_gallery_tree
from .types import Category
from .viewer import Viewer


def load_local_categories(root: str, category_filter: Optional[str] = None) -> List[Category]:
    """Build the tree for the desktop app. A failed walk shows an empty grid."""
    try:
        return build_gallery_tree(root, category_filter)
    except GalleryBuildError as e:
        log_exception("APP", e)
        return []


def _unload_texture(tex) -> None:
    if getattr(tex, "id", 0):
        rl.UnloadTexture(tex)


@dataclass
class Application:
    """
    Main application orchestrator.

    Usage:
        app = Application(root="/srv/media")
        app.initialize()
        app.run()
    """

    root: Optional[str] = None
    remote_url: Optional[str] = None
    category_filter: Optional[str] = None

    def __post_init__(self):
        self.source = MediaSource(root=self.root, base_url=self.remote_url)
        self.running = False
        self.viewer: Optional[Viewer] = None
        self.platform: Optional[RaylibPlatform] = None
        self.renderer: Optional[Renderer] = None
        self.input_handler: Optional[InputHandler] = None
        self.tiles: Optional[TextureCache] = None
        self.full: Optional[TextureCache] = None
        self.feed: Optional[GalleryFeed] = None

    def initialize(self) -> None:
        """Open the window and start loading the gallery."""
        rl.SetConfigFlags(rl.FLAG_WINDOW_RESIZABLE | rl.FLAG_MSAA_4X_HINT)
        try:
            rl.InitWindow(cfg.WINDOW_WIDTH, cfg.WINDOW_HEIGHT, cfg.WINDOW_TITLE)
        except TypeError:
            rl.InitWindow(cfg.WINDOW_WIDTH, cfg.WINDOW_HEIGHT, cfg.WINDOW_TITLE.encode("utf-8"))
        rl.SetExitKey(0)  # Escape belongs to the viewer
        rl.SetTargetFPS(cfg.TARGET_FPS)

        self.platform = RaylibPlatform()
        self.viewer = Viewer(self.platform)
        self.input_handler = InputHandler()
        workers = max(1, cfg.LOADER_WORKERS // 2)
        self.tiles = TextureCache(self.source, texture_from_png, _unload_texture,
                                  max_dim=cfg.THUMB_MAX_DIMENSION, workers=workers)
        self.full = TextureCache(self.source, texture_from_png, _unload_texture,
                                 max_dim=cfg.MAX_IMAGE_DIMENSION, workers=workers,
                                 limit=max(4, cfg.TEXTURE_CACHE_LIMIT // 32))
        self.renderer = Renderer(tiles=self.tiles, full=self.full)

        if self.remote_url:
            self.feed = GalleryFeed(self.remote_url, self.category_filter)
            self.feed.start(self.viewer.state.loading)
        else:
            self.viewer.set_categories(load_local_categories(self.root, self.category_filter))

        log(f"[APP] Initialized ({self.source.describe()}), {cfg.TARGET_FPS} fps")

    def run(self) -> None:
        self.running = True
        log("[APP] Starting main loop")

        try:
            while self.running:
                self._frame()
        except Exception as e:
            log(f"[APP][CRITICAL] Unhandled exception: {e!r}")
            log(f"[APP][CRITICAL] Traceback:\n{traceback.format_exc()}")
        finally:
            self._cleanup()

    def _frame(self) -> None:
        if rl.WindowShouldClose():
            self.running = False
            return

        self.platform.poll()
        self._update_window()

        if self.feed is not None:
            categories = self.feed.poll(self.viewer.state.loading)
            if categories is not None:
                self.viewer.set_categories(categories)
                self.feed = None

        for cmd in self.input_handler.poll(self.viewer):
            self._execute_command(cmd)
            if not self.running:
                return

        self.tiles.poll()
        self.full.poll()
        self.viewer.state.window.grid_scroll_max = level_scroll_max(self.viewer.state)

        self.renderer.draw_frame(self.viewer.state)
        increment_frame()

    def _update_window(self) -> None:
        win = self.viewer.state.window
        sw, sh = rl.GetScreenWidth(), rl.GetScreenHeight()
        if (sw, sh) != win.size:
            log(f"[APP] Window size {win.screen_w}x{win.screen_h} -> {sw}x{sh}")
        win.screen_w, win.screen_h = sw, sh
        container = viewer_container(sw, sh, win.is_fullscreen)
        if (container.w, container.h) != win.container:
            self.viewer.set_container_size(container.w, container.h)

    def _execute_command(self, cmd: Command) -> None:
        if isinstance(cmd, CloseApp):
            cmd.execute(self.viewer)
            log("[APP] CloseApp command received")
            self.running = False
            return
        cmd.execute(self.viewer)

    def _cleanup(self) -> None:
        log("[APP] Starting cleanup")
        if self.viewer is not None:
            self.viewer.teardown()
        for cache in (self.tiles, self.full):
            if cache is None:
                continue
            try:
                cache.shutdown()
            except Exception as e:
                log(f"[APP][ERR] Cache shutdown: {e!r}")
        try:
            log("[APP] Closing window")
            rl.CloseWindow()
        except Exception as e:
            log(f"[APP][ERR] CloseWindow: {e!r}")
        log("[APP] Cleanup complete")

    def stop(self) -> None:
        self.running = False


def run_viewer(root: Optional[str] = None, remote_url: Optional[str] = None,
               category_filter: Optional[str] = None) -> None:
    app = Application(root=root, remote_url=remote_url, category_filter=category_filter)
    try:
        app.initialize()
    except Exception as e:
        log(f"[INIT][CRITICAL] Failed to initialize: {e!r}")
        log(f"[INIT][CRITICAL] Traceback:\n{traceback.format_exc()}")
        app._cleanup()
        raise
    app.run()
