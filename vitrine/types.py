"""Core data types for Vitrine."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, Dict, List, Optional, Tuple


class EntryType(str, Enum):
    """Closed set of entry kinds. Every media decision goes through its predicates."""
    FOLDER = "folder"
    IMAGE = "image"
    VIDEO = "video"
    GIF = "gif"

    @property
    def is_folder(self) -> bool:
        return self is EntryType.FOLDER

    @property
    def is_media(self) -> bool:
        """Image, video or gif: something the viewer can show directly."""
        return self in (EntryType.IMAGE, EntryType.VIDEO, EntryType.GIF)

    @property
    def is_zoomable(self) -> bool:
        """Image or gif. Videos keep their own controls and never zoom or pan."""
        return self in (EntryType.IMAGE, EntryType.GIF)


@dataclass(frozen=True)
class Entry:
    """One item inside a category: a media file or a folder one level deeper."""
    name: str
    type: EntryType
    path: str
    images: Optional[Tuple[str, ...]] = None  # Filenames, folders only

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type.value, "path": self.path}
        if self.type.is_folder:
            data["images"] = list(self.images or ())
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Entry:
        etype = EntryType(data["type"])
        images = None
        if etype.is_folder:
            images = tuple(str(name) for name in data.get("images") or ())
        return cls(name=str(data["name"]), type=etype, path=str(data["path"]), images=images)


@dataclass(frozen=True)
class Category:
    """Top-level browsable unit, rendered as one grid tile."""
    name: str
    path: str
    entries: Tuple[Entry, ...] = ()

    @property
    def media_entries(self) -> Tuple[Entry, ...]:
        return tuple(e for e in self.entries if e.type.is_media)

    @property
    def single_media(self) -> Optional[Entry]:
        """The only entry, if the category holds exactly one media entry."""
        if len(self.entries) == 1 and self.entries[0].type.is_media:
            return self.entries[0]
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "items": [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Category:
        return cls(
            name=str(data["name"]),
            path=str(data["path"]),
            entries=tuple(Entry.from_dict(item) for item in data.get("items") or ()),
        )


def categories_to_json(categories: List[Category]) -> List[Dict[str, Any]]:
    return [c.to_dict() for c in categories]


@dataclass
class ViewParams:
    """Viewer transformation: zoom factor and pan offset in screen pixels."""
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0

    def copy(self) -> ViewParams:
        return ViewParams(self.zoom, self.pan_x, self.pan_y)

    @property
    def pan(self) -> Tuple[float, float]:
        return (self.pan_x, self.pan_y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned screen rectangle."""
    x: float
    y: float
    w: float
    h: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.w / 2.0, self.y + self.h / 2.0)


class LoadPriority(IntEnum):
    """Priority levels for async media loading."""
    CURRENT = 0   # Media shown in the viewer
    TILE = 1      # Grid and folder tiles


@dataclass
class LoadTask:
    """A task for the async media loader."""
    path: str
    priority: LoadPriority
    callback: Callable
    timestamp: float = 0.0

    def __lt__(self, other: LoadTask) -> bool:
        if self.priority != other.priority:
            return self.priority < other.priority
        return self.timestamp < other.timestamp


@dataclass
class TextureInfo:
    """Information about a loaded texture."""
    tex: Any  # rl.Texture2D
    w: int
    h: int
    path: str = ""
