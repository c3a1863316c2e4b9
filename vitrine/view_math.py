"""Pure view calculation functions - no side effects, no state mutation."""

from __future__ import annotations
from typing import Tuple

from . import config as cfg
from .math_utils import clamp
from .types import Rect, ViewParams


def step_zoom(zoom: float, delta: float, step: float = cfg.ZOOM_STEP_WHEEL) -> float:
    """Apply one wheel step in the direction of delta.

    Positive delta zooms in. The result is clamped to [ZOOM_MIN, ZOOM_MAX]
    and rounded so that repeated steps land on exact multiples of the step.

    Args:
        zoom: Current zoom factor.
        delta: Wheel movement, only its sign matters.
        step: Zoom change per wheel step.

    Returns:
        New zoom factor.
    """
    if delta == 0:
        return zoom
    change = step if delta > 0 else -step
    return round(clamp(zoom + change, cfg.ZOOM_MIN, cfg.ZOOM_MAX), 2)


def max_pan(size: float, zoom: float) -> float:
    """Largest pan offset on one axis for a container dimension and zoom."""
    if zoom <= 1.0:
        return 0.0
    return size * (zoom - 1.0) / 2.0


def clamp_pan(view: ViewParams, container_w: float, container_h: float) -> ViewParams:
    """Clamp pan offsets so the zoomed media cannot leave the container.

    At zoom <= 1 the media is never larger than the container, so the pan
    collapses to the center.

    Args:
        view: Current view parameters.
        container_w: Live container width in pixels.
        container_h: Live container height in pixels.

    Returns:
        New ViewParams with clamped offsets.
    """
    result = view.copy()
    if view.zoom <= 1.0:
        result.pan_x = 0.0
        result.pan_y = 0.0
        return result

    lim_x = max_pan(container_w, view.zoom)
    lim_y = max_pan(container_h, view.zoom)
    result.pan_x = clamp(view.pan_x, -lim_x, lim_x)
    result.pan_y = clamp(view.pan_y, -lim_y, lim_y)
    return result


def wheel_view(view: ViewParams, delta: float,
               container_w: float, container_h: float) -> ViewParams:
    """Zoom by one wheel step, then re-apply the pan bounds."""
    nv = ViewParams(zoom=step_zoom(view.zoom, delta), pan_x=view.pan_x, pan_y=view.pan_y)
    return clamp_pan(nv, container_w, container_h)


def drag_origin(view: ViewParams, pointer_x: float, pointer_y: float) -> Tuple[float, float]:
    """Drag anchor: pointer position minus the current pan."""
    return (pointer_x - view.pan_x, pointer_y - view.pan_y)


def dragged_view(view: ViewParams, origin: Tuple[float, float],
                 pointer_x: float, pointer_y: float,
                 container_w: float, container_h: float) -> ViewParams:
    """Pan to follow the pointer from the drag anchor, clamped."""
    nv = ViewParams(
        zoom=view.zoom,
        pan_x=pointer_x - origin[0],
        pan_y=pointer_y - origin[1],
    )
    return clamp_pan(nv, container_w, container_h)


def media_rect(fit: Rect, view: ViewParams, container: Rect) -> Rect:
    """Screen rectangle of fitted media after zoom about the container center and pan.

    Args:
        fit: Media rectangle at zoom 1, centered in the container.
        view: Zoom and pan to apply.
        container: Container rectangle.

    Returns:
        Transformed rectangle.
    """
    cx, cy = container.center
    w = fit.w * view.zoom
    h = fit.h * view.zoom
    fx, fy = fit.center
    x = cx + (fx - cx) * view.zoom - w / 2.0 + view.pan_x
    y = cy + (fy - cy) * view.zoom - h / 2.0 + view.pan_y
    return Rect(x, y, w, h)
