"""Remote gallery fetch - the client side of the /api/gallery endpoint."""

from __future__ import annotations
from threading import Lock, Thread
from typing import List, Optional

import requests

from . import config as cfg
from .logging import log
from .state import LoadingState
from .types import Category


class FetchError(Exception):
    """The gallery could not be fetched or parsed."""


def gallery_url(base_url: str) -> str:
    return base_url.rstrip("/") + cfg.GALLERY_ENDPOINT


def request_gallery(base_url: str, folder: Optional[str] = None) -> List[Category]:
    """Fetch and parse the category list. Raises FetchError on any failure."""
    url = gallery_url(base_url)
    params = {"folder": folder} if folder else None
    try:
        response = requests.get(url, params=params, timeout=cfg.FETCH_TIMEOUT_S)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        raise FetchError(f"{url}: {e}") from e
    except ValueError as e:
        raise FetchError(f"{url}: invalid JSON ({e})") from e

    if not isinstance(data, list):
        raise FetchError(f"{url}: expected a list, got {type(data).__name__}")
    try:
        return [Category.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise FetchError(f"{url}: malformed category ({e!r})") from e


def fetch_gallery(base_url: str, folder: Optional[str] = None) -> List[Category]:
    """Fetch the category list, or [] if anything goes wrong."""
    try:
        categories = request_gallery(base_url, folder)
    except FetchError as e:
        log(f"[FETCH][ERR] {e}")
        return []
    log(f"[FETCH] {len(categories)} categories from {base_url}")
    return categories


class GalleryFeed:
    """One-shot background fetch picked up by the main loop.

    The worker thread only stores its result. poll() hands it over on the
    main thread exactly once and clears the loading flag on both branches.
    """

    def __init__(self, base_url: str, folder: Optional[str] = None):
        self.base_url = base_url
        self.folder = folder
        self._lock = Lock()
        self._result: Optional[List[Category]] = None
        self._error: Optional[str] = None
        self._done = False
        self._delivered = False
        self._thread: Optional[Thread] = None

    def start(self, loading: LoadingState) -> None:
        loading.begin()
        self._thread = Thread(target=self._run, daemon=True)
        self._thread.start()
        log(f"[FETCH] Started: {gallery_url(self.base_url)}")

    def _run(self) -> None:
        result: List[Category] = []
        error = None
        try:
            result = request_gallery(self.base_url, self.folder)
        except FetchError as e:
            log(f"[FETCH][ERR] {e}")
            error = str(e)
        with self._lock:
            self._result = result
            self._error = error
            self._done = True

    def poll(self, loading: LoadingState) -> Optional[List[Category]]:
        """Return the fetched list once, when ready. None while pending or after delivery."""
        with self._lock:
            if not self._done or self._delivered:
                return None
            self._delivered = True
            result = self._result or []
            error = self._error
        loading.finish(error)
        log(f"[FETCH] Delivered {len(result)} categories" + (f" (error: {error})" if error else ""))
        return result

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
