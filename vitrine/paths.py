"""Public path convention: PUBLIC_PREFIX followed by traversed directory segments."""

from __future__ import annotations
import os
from typing import Optional

from . import config as cfg


def public_path(*segments: str) -> str:
    """Join segments under the public prefix with forward slashes."""
    return "/".join([cfg.PUBLIC_PREFIX.rstrip("/")] + [s.strip("/") for s in segments if s])


def join_public(base: str, *segments: str) -> str:
    """Append segments to an already public path."""
    return "/".join([base.rstrip("/")] + [s.strip("/") for s in segments if s])


def relative_segments(path: str) -> Optional[list]:
    """Split a public path into its segments below the prefix.

    Returns None when the path is not under the prefix or tries to climb
    out of it.
    """
    prefix = cfg.PUBLIC_PREFIX.rstrip("/")
    if path != prefix and not path.startswith(prefix + "/"):
        return None
    rest = path[len(prefix):].strip("/")
    segments = [s for s in rest.split("/") if s]
    if any(s in (".", "..") or "\\" in s for s in segments):
        return None
    return segments


def to_filesystem(root: str, path: str) -> Optional[str]:
    """Map a public path back to a location under root, or None if outside."""
    segments = relative_segments(path)
    if segments is None:
        return None
    root_abs = os.path.abspath(root)
    full = os.path.abspath(os.path.join(root_abs, *segments))
    if full != root_abs and not full.startswith(root_abs + os.sep):
        return None
    return full
