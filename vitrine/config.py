"""Application configuration constants."""

from __future__ import annotations

VERSION = "0.1.0"

# Media
IMAGE_EXTS = frozenset({".png", ".jpg", ".jpeg", ".webp"})
GIF_EXTS = frozenset({".gif"})
VIDEO_EXTS = frozenset({".mp4", ".webm", ".mov", ".avi"})
ALLOWED_EXTS = IMAGE_EXTS | GIF_EXTS | VIDEO_EXTS

# Tree layout
FLAT_CATEGORY = "renders"   # Top-level directory whose children become categories
PUBLIC_PREFIX = "/pics"     # Every emitted path starts with this
PLACEHOLDER_PATH = "/placeholder.png"
THUMB_NAME = "thumb.png"

# Zoom
ZOOM_MIN = 0.5
ZOOM_MAX = 3.0
ZOOM_STEP_WHEEL = 0.1
ZOOM_DEFAULT = 1.0

# Performance
TARGET_FPS = 60
LOADER_WORKERS = 4
TEXTURE_UPLOAD_BUDGET_PER_FRAME = 4

# Window
WINDOW_TITLE = "Vitrine"
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800

# Grid
GRID_COLUMNS = 3
FOLDER_COLUMNS = 2
GRID_TILE_HEIGHT = 320
GRID_GAP = 24
GRID_MARGIN = 32
GRID_HEADER_HEIGHT = 64
GRID_SCROLL_STEP = 80
MAINTAIN_ASPECT_RATIO = False

# Viewer
VIEWER_MARGIN_FRAC = 0.05   # Container inset on each side of the screen
VIEWER_NAV_HEIGHT = 56
CLOSE_BTN_SIZE = 36
CLOSE_BTN_MARGIN = 12

# Thumbnails
THUMB_MAX_DIMENSION = 512
TEXTURE_CACHE_LIMIT = 256
MAX_IMAGE_DIMENSION = 8192

# Font settings
FONT_SIZE = 22
TITLE_FONT_SIZE = 28

# HTTP
HTTP_HOST = "127.0.0.1"
HTTP_PORT = 8080
FETCH_TIMEOUT_S = 10.0
GALLERY_ENDPOINT = "/api/gallery"
THUMBNAIL_ENDPOINT = "/api/thumbnail"
