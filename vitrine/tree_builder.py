"""Gallery tree builder - turns a directory layout into categories and entries.

Two structuring modes:

    renders/                 flat mode: every child is its own category
        Anim/frame1.png   -> Category "Anim" with one image entry
        clip.mp4          -> Category "clip" wrapping one video entry

    models/                  nested mode: one category per subdirectory
        Set A/part1.png   -> image entry of "Set A"
        Set A/sub/x.png   -> folder entry "sub" with images [x.png, ...]

Nesting stops at three levels: category, entry, folder image list.
"""

from __future__ import annotations
import os
from typing import List, Optional, Tuple

from . import config as cfg
from .classifier import classify, is_allowed
from .logging import log
from .paths import join_public, public_path, to_filesystem
from .types import Category, Entry, EntryType


class GalleryBuildError(Exception):
    """A directory could not be read while walking the tree."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"cannot read {path}: {cause}")
        self.path = path
        self.cause = cause


def _scan(dirpath: str) -> List[os.DirEntry]:
    """List a directory in discovery order, skipping hidden names."""
    try:
        with os.scandir(dirpath) as it:
            return [e for e in it if not e.name.startswith(".")]
    except OSError as e:
        raise GalleryBuildError(dirpath, e) from e


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError as e:
        raise GalleryBuildError(entry.path, e) from e


def _is_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError as e:
        raise GalleryBuildError(entry.path, e) from e


def list_media_names(dirpath: str) -> List[str]:
    """Allowed media filenames directly inside dirpath, sorted by name."""
    return sorted(e.name for e in _scan(dirpath) if _is_file(e) and is_allowed(e.name))


def _media_entry(name: str, path: str) -> Entry:
    return Entry(name=name, type=classify(name), path=path)


def _dirs_first(entries: List[os.DirEntry]) -> List[os.DirEntry]:
    """Directories before files; each group keeps its incoming order."""
    dirs = [e for e in entries if _is_dir(e)]
    files = [e for e in entries if not _is_dir(e)]
    return dirs + files


def build_flat_categories(root: str, top: str) -> List[Category]:
    """Flat mode: each subdirectory and each loose media file becomes a category."""
    top_path = os.path.join(root, top)
    result: List[Category] = []

    children = sorted(_scan(top_path), key=lambda e: e.name)
    for child in _dirs_first(children):
        if _is_dir(child):
            names = list_media_names(child.path)
            entries = tuple(
                _media_entry(name, public_path(top, child.name, name)) for name in names
            )
            result.append(Category(
                name=child.name,
                path=public_path(top, child.name),
                entries=entries,
            ))
        elif _is_file(child) and is_allowed(child.name):
            stem = os.path.splitext(child.name)[0]
            result.append(Category(
                name=stem,
                path=public_path(top),
                entries=(_media_entry(child.name, public_path(top, child.name)),),
            ))

    return result


def _build_nested_entries(root: str, top: str, sub: str) -> Tuple[Entry, ...]:
    sub_path = os.path.join(root, top, sub)
    dirs: List[str] = []
    files: List[str] = []
    for e in _scan(sub_path):
        if _is_dir(e):
            dirs.append(e.name)
        elif _is_file(e) and is_allowed(e.name):
            files.append(e.name)

    entries: List[Entry] = []
    for name in sorted(dirs):
        images = tuple(list_media_names(os.path.join(sub_path, name)))
        entries.append(Entry(
            name=name,
            type=EntryType.FOLDER,
            path=public_path(top, sub, name),
            images=images,
        ))
    for name in sorted(files):
        entries.append(_media_entry(name, public_path(top, sub, name)))
    return tuple(entries)


def build_nested_categories(root: str, top: str) -> List[Category]:
    """Nested mode: one category per subdirectory of the top directory."""
    top_path = os.path.join(root, top)
    subdirs = sorted(e.name for e in _scan(top_path) if _is_dir(e))
    return [
        Category(
            name=sub,
            path=public_path(top, sub),
            entries=_build_nested_entries(root, top, sub),
        )
        for sub in subdirs
    ]


def list_top_directories(root: str, category_filter: Optional[str] = None) -> List[str]:
    names = sorted(e.name for e in _scan(root) if _is_dir(e))
    if category_filter:
        names = [n for n in names if n == category_filter]
    return names


def build_gallery_tree(root: str, category_filter: Optional[str] = None) -> List[Category]:
    """Walk root and return the ordered category list.

    A missing root yields an empty list. Any read failure inside the walk
    raises GalleryBuildError for the whole request.
    """
    if not os.path.isdir(root):
        log(f"[TREE] Root missing: {root}")
        return []

    categories: List[Category] = []
    for top in list_top_directories(root, category_filter):
        if top == cfg.FLAT_CATEGORY:
            built = build_flat_categories(root, top)
        else:
            built = build_nested_categories(root, top)
        log(f"[TREE] {top}: {len(built)} categories ({'flat' if top == cfg.FLAT_CATEGORY else 'nested'})")
        categories.extend(built)

    log(f"[TREE] Built {len(categories)} categories from {root}"
        + (f" (folder={category_filter})" if category_filter else ""))
    return categories


def find_folder_thumbnail(root: str, folder_path: str) -> Optional[str]:
    """Look up a thumbnail for a public folder path directly on disk.

    Prefers thumb.png, then the first image or gif in listing order.
    Returns None when the folder is missing or has no usable image.
    """
    local = to_filesystem(root, folder_path)
    if local is None or not os.path.isdir(local):
        return None

    if os.path.isfile(os.path.join(local, cfg.THUMB_NAME)):
        return join_public(folder_path, cfg.THUMB_NAME)

    for e in _scan(local):
        if _is_file(e) and is_allowed(e.name) and classify(e.name).is_zoomable:
            return join_public(folder_path, e.name)
    return None
