"""Raylib compatibility layer - smooths over binding differences between raylibpy and python-raylib."""

from __future__ import annotations
from typing import Any

try:
    import raylibpy as rl
    RL_VERSION = "raylibpy"
except ImportError:
    import raylib as rl
    RL_VERSION = "python-raylib"

RL_WHITE = getattr(rl, "RAYWHITE", rl.WHITE)


def make_rect(x: float, y: float, w: float, h: float) -> Any:
    """Create a raylib Rectangle for the current binding."""
    if hasattr(rl, "Rectangle"):
        return rl.Rectangle(x, y, w, h)
    r = rl.ffi.new("Rectangle *")
    r[0].x = float(x)
    r[0].y = float(y)
    r[0].width = float(w)
    r[0].height = float(h)
    return r[0]


def make_vec2(x: float, y: float) -> Any:
    if hasattr(rl, "Vector2"):
        return rl.Vector2(x, y)
    v = rl.ffi.new("Vector2 *")
    v[0].x = float(x)
    v[0].y = float(y)
    return v[0]


def make_color(r: int, g: int, b: int, a: int = 255) -> Any:
    """Create a raylib Color for the current binding."""
    if hasattr(rl, "Color"):
        return rl.Color(int(r), int(g), int(b), int(a))
    c = rl.ffi.new("Color *")
    c[0].r, c[0].g, c[0].b, c[0].a = int(r), int(g), int(b), int(a)
    return c[0]


def draw_text(text: str, x: int, y: int, size: int, color: Any) -> None:
    """Draw text with encoding fallback."""
    try:
        rl.DrawText(text, int(x), int(y), int(size), color)
    except TypeError:
        rl.DrawText(text.encode("utf-8"), int(x), int(y), int(size), color)


def measure_text(text: str, size: int) -> int:
    try:
        return rl.MeasureText(text, int(size))
    except TypeError:
        return rl.MeasureText(text.encode("utf-8"), int(size))


def texture_from_png(data: bytes) -> Any:
    """Decode PNG bytes into an Image and upload it as a texture. Main thread only."""
    img = rl.LoadImageFromMemory(b".png", data, len(data))
    if img.width <= 0 or img.height <= 0:
        raise RuntimeError("empty image")
    try:
        tex = rl.LoadTextureFromImage(img)
    finally:
        rl.UnloadImage(img)
    return tex


def is_texture_valid(tex: Any) -> bool:
    return (getattr(tex, "id", 0) or 0) > 0


__all__ = [
    "rl",
    "RL_VERSION",
    "RL_WHITE",
    "make_rect",
    "make_vec2",
    "make_color",
    "draw_text",
    "measure_text",
    "texture_from_png",
    "is_texture_valid",
]
