"""Navigation state - view level, open category, open entry, position."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..paths import join_public
from ..types import Category, Entry


class ViewLevel(Enum):
    """Nested view levels. Escape always moves exactly one level up."""
    GRID = 0
    FOLDER = 1
    ITEM = 2


@dataclass
class NavigationState:
    """Which category/entry is open and where we are in its sequence."""
    level: ViewLevel = ViewLevel.GRID
    category: Optional[Category] = None
    entry: Optional[Entry] = None
    index: int = 0

    @property
    def is_auto_expanded(self) -> bool:
        """Folder level over a category with a single media entry.

        Rendered as an open item while back-navigation still treats it as
        the folder level.
        """
        return (self.level is ViewLevel.FOLDER and
                self.category is not None and
                self.category.single_media is not None)

    @property
    def shows_media(self) -> bool:
        """A media item is on screen (item level or auto-expanded folder)."""
        return self.level is ViewLevel.ITEM or self.is_auto_expanded

    @property
    def sequence(self) -> List[str]:
        """Navigable media paths for the current position."""
        if self.category is None:
            return []
        if self.level is ViewLevel.ITEM and self.entry is not None:
            if self.entry.type.is_folder:
                return [join_public(self.category.path, self.entry.name, name)
                        for name in self.entry.images or ()]
            return [e.path for e in self.category.media_entries]
        if self.is_auto_expanded:
            return [self.category.entries[0].path]
        return []

    @property
    def count(self) -> int:
        return len(self.sequence)

    @property
    def current_path(self) -> Optional[str]:
        """Media path on screen, or None when nothing is shown."""
        seq = self.sequence
        if 0 <= self.index < len(seq):
            return seq[self.index]
        return None

    def reset(self) -> None:
        self.level = ViewLevel.GRID
        self.category = None
        self.entry = None
        self.index = 0
