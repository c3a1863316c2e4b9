"""Thumbnail resolution - pick one representative media path per category."""

from __future__ import annotations

from . import config as cfg
from .paths import join_public
from .types import Category


def resolve_thumbnail(category: Category) -> str:
    """Return the tile image for a category.

    Priority: an explicit thumb.png entry, the first direct media entry,
    the first image of the first non-empty folder entry, the placeholder.
    """
    for entry in category.entries:
        if entry.type.is_zoomable and entry.name == cfg.THUMB_NAME:
            return entry.path

    for entry in category.entries:
        if entry.type.is_media:
            return entry.path

    for entry in category.entries:
        if entry.type.is_folder and entry.images:
            return join_public(category.path, entry.name, entry.images[0])

    return cfg.PLACEHOLDER_PATH
