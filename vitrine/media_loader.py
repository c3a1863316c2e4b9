"""Async media loading - worker threads decode, the main thread uploads textures.

Workers only produce CPU-side PNG bytes. Texture upload and unload go
through callbacks that the application runs on the main thread, so this
module never touches the GPU itself.
"""

from __future__ import annotations
import io
import os
from collections import OrderedDict, deque
from dataclasses import dataclass
from queue import Empty, PriorityQueue
from threading import Lock, Thread
from typing import Any, Callable, Deque, Optional, Set, Tuple

import requests
from PIL import Image

from . import config as cfg
from .classifier import classify
from .logging import log, now
from .paths import to_filesystem
from .types import LoadPriority, LoadTask, TextureInfo


@dataclass
class DecodedMedia:
    """CPU-side result of a decode: PNG bytes plus the original size."""
    png: bytes
    w: int
    h: int


class MediaSource:
    """Reads the raw bytes behind a public media path."""

    def __init__(self, root: Optional[str] = None, base_url: Optional[str] = None):
        if (root is None) == (base_url is None):
            raise ValueError("exactly one of root or base_url is required")
        self.root = root
        self.base_url = base_url.rstrip("/") if base_url else None

    def read(self, path: str) -> bytes:
        if self.root is not None:
            local = to_filesystem(self.root, path)
            if local is None:
                raise FileNotFoundError(path)
            with open(local, "rb") as f:
                return f.read()
        response = requests.get(self.base_url + path, timeout=cfg.FETCH_TIMEOUT_S)
        response.raise_for_status()
        return response.content

    def describe(self) -> str:
        return self.root if self.root is not None else self.base_url


def decode_media(data: bytes, max_dim: int) -> DecodedMedia:
    """Decode the first frame of an image or gif, downscaled to max_dim, as PNG."""
    with Image.open(io.BytesIO(data)) as img:
        img.seek(0)
        w, h = img.size
        if w <= 0 or h <= 0:
            raise ValueError("empty image")
        frame = img.convert("RGBA")
    if max(w, h) > max_dim:
        frame.thumbnail((max_dim, max_dim), Image.LANCZOS)
    buf = io.BytesIO()
    frame.save(buf, format="PNG")
    return DecodedMedia(png=buf.getvalue(), w=w, h=h)


@dataclass
class UIEvent:
    callback: Callable
    args: tuple


class AsyncMediaLoader:
    """Priority queue of decode tasks served by a small worker pool."""

    def __init__(self, loader_func: Callable[[str], Any], workers: int = cfg.LOADER_WORKERS):
        self.task_queue: PriorityQueue = PriorityQueue()
        self.loader_func = loader_func
        self.running = True
        self.ui_events: Deque[UIEvent] = deque()
        self.ui_lock = Lock()
        self.workers = []

        for _ in range(workers):
            worker = Thread(target=self._worker_loop, daemon=True)
            worker.start()
            self.workers.append(worker)

    def _worker_loop(self) -> None:
        while self.running:
            try:
                task = self.task_queue.get(timeout=0.1)
            except Empty:
                continue

            result = None
            error = None
            try:
                result = self.loader_func(task.path)
            except Exception as e:
                error = e

            self._push_ui_event(task.callback, (task.path, result, error))
            self.task_queue.task_done()

    def _push_ui_event(self, callback: Callable, args: tuple) -> None:
        with self.ui_lock:
            self.ui_events.append(UIEvent(callback, args))

    def poll_ui_events(self, max_events: int = 100) -> int:
        """Run finished callbacks on the calling thread. Returns how many ran."""
        events = []
        with self.ui_lock:
            while self.ui_events and len(events) < max_events:
                events.append(self.ui_events.popleft())

        for event in events:
            try:
                event.callback(*event.args)
            except Exception as e:
                log(f"[LOAD][ERR] callback: {e!r}")
        return len(events)

    def submit(self, path: str, priority: LoadPriority, callback: Callable) -> None:
        self.task_queue.put(LoadTask(path, priority, callback, now()))

    def shutdown(self) -> None:
        self.running = False
        for worker in self.workers:
            worker.join(timeout=1.0)


class TextureCache:
    """Path -> TextureInfo cache with LRU eviction and per-frame upload budget.

    Decoded media is downscaled so its longer side is at most max_dim.

    upload turns PNG bytes into a texture, unload frees one. Both run on
    the thread that calls poll().
    """

    def __init__(self, source: MediaSource,
                 upload: Callable[[bytes], Any],
                 unload: Callable[[Any], None],
                 max_dim: int = cfg.MAX_IMAGE_DIMENSION,
                 workers: int = cfg.LOADER_WORKERS,
                 limit: int = cfg.TEXTURE_CACHE_LIMIT):
        self.source = source
        self._upload = upload
        self._unload = unload
        self.limit = limit
        self.max_dim = max_dim
        self._textures: "OrderedDict[str, TextureInfo]" = OrderedDict()
        self._pending: Set[str] = set()
        self._failed: Set[str] = set()
        self._ready: Deque[Tuple[str, DecodedMedia]] = deque()
        self.loader = AsyncMediaLoader(self._load, workers)

    def _load(self, path: str) -> DecodedMedia:
        return decode_media(self.source.read(path), self.max_dim)

    def _on_loaded(self, path: str, decoded: Optional[DecodedMedia], error: Optional[Exception]) -> None:
        if error is not None:
            self._pending.discard(path)
            self._failed.add(path)
            log(f"[LOAD][ERR] {os.path.basename(path)}: {error!r}")
            return
        self._ready.append((path, decoded))

    def get(self, path: str, priority: LoadPriority = LoadPriority.TILE) -> Optional[TextureInfo]:
        """Return the texture if loaded, otherwise queue it and return None."""
        ti = self._textures.get(path)
        if ti is not None:
            self._textures.move_to_end(path)
            return ti
        if path == cfg.PLACEHOLDER_PATH or path in self._pending or path in self._failed:
            return None
        if not classify(path).is_zoomable:
            return None
        self._pending.add(path)
        self.loader.submit(path, priority, self._on_loaded)
        return None

    def is_loading(self, path: str) -> bool:
        return path in self._pending

    def has_failed(self, path: str) -> bool:
        return path in self._failed

    def poll(self, budget: int = cfg.TEXTURE_UPLOAD_BUDGET_PER_FRAME) -> int:
        """Collect finished decodes and upload up to budget of them."""
        self.loader.poll_ui_events()
        uploaded = 0
        while self._ready and uploaded < budget:
            path, decoded = self._ready.popleft()
            self._pending.discard(path)
            try:
                tex = self._upload(decoded.png)
            except Exception as e:
                self._failed.add(path)
                log(f"[LOAD][ERR] upload {os.path.basename(path)}: {e!r}")
                continue
            self._textures[path] = TextureInfo(tex=tex, w=decoded.w, h=decoded.h, path=path)
            uploaded += 1
        self._evict()
        return uploaded

    def _evict(self) -> None:
        while len(self._textures) > self.limit:
            path, ti = self._textures.popitem(last=False)
            self._unload(ti.tex)
            log(f"[LOAD] Evicted {os.path.basename(path)}")

    def clear(self) -> None:
        for ti in self._textures.values():
            self._unload(ti.tex)
        self._textures.clear()
        self._ready.clear()
        self._pending.clear()
        self._failed.clear()

    def shutdown(self) -> None:
        self.loader.shutdown()
        self.clear()
        log(f"[LOAD] Shutdown ({self.source.describe()})")

    def __len__(self) -> int:
        return len(self._textures)

    def __contains__(self, path: str) -> bool:
        return path in self._textures
