"""Media classification by file extension."""

from __future__ import annotations
import os

from .config import ALLOWED_EXTS, GIF_EXTS, VIDEO_EXTS
from .types import EntryType


def extension_of(filename: str) -> str:
    """Lower-cased extension including the dot, or '' when there is none."""
    return os.path.splitext(filename or "")[1].lower()


def classify(filename: str) -> EntryType:
    """Map a filename to image, video or gif.

    Total over every string: anything that is not a known video or gif
    extension (including no extension at all) is an image. Filtering out
    unsupported files is the caller's job, see is_allowed().
    """
    ext = extension_of(filename)
    if ext in VIDEO_EXTS:
        return EntryType.VIDEO
    if ext in GIF_EXTS:
        return EntryType.GIF
    return EntryType.IMAGE


def is_allowed(filename: str) -> bool:
    """Check the discovery allow-list."""
    return extension_of(filename) in ALLOWED_EXTS
