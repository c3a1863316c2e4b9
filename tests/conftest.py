import os
from typing import Dict, Union

import pytest

from vitrine import logging as vlog
from vitrine.classifier import classify
from vitrine.platform import Platform
from vitrine.types import Category, Entry, EntryType

Tree = Dict[str, Union["Tree", bytes, str, None]]


@pytest.fixture(autouse=True)
def quiet_logger():
    vlog.set_quiet(True)
    yield
    vlog.set_quiet(False)
    vlog.set_stream(None)


@pytest.fixture
def make_tree(tmp_path):
    """Create a directory tree from a nested dict.

    Dict values are subdirectories; bytes or str values are file contents;
    None creates an empty file.
    """
    def _make(spec: Tree, base=None) -> str:
        base = base or str(tmp_path)
        for name, value in spec.items():
            path = os.path.join(base, name)
            if isinstance(value, dict):
                os.makedirs(path, exist_ok=True)
                _make(value, path)
            else:
                data = value if isinstance(value, bytes) else (value or "").encode("utf-8")
                with open(path, "wb") as f:
                    f.write(data)
        return base

    return _make


class FakePlatform(Platform):
    """In-memory platform. refuse=True makes fullscreen requests fail silently."""

    def __init__(self, fullscreen: bool = False, refuse: bool = False):
        super().__init__()
        self.fullscreen = fullscreen
        self.refuse = refuse
        self.requests = 0
        self.exits = 0

    def is_fullscreen(self) -> bool:
        return self.fullscreen

    def request_fullscreen(self) -> None:
        self.requests += 1
        if not self.refuse:
            self.fullscreen = True

    def exit_fullscreen(self) -> None:
        self.exits += 1
        self.fullscreen = False

    def set_external(self, value: bool) -> None:
        """Fullscreen changed outside the viewer, e.g. the user pressed a system key."""
        self.fullscreen = value
        self.notify_fullscreen_change()


@pytest.fixture
def platform():
    return FakePlatform()


def image(name: str, base: str) -> Entry:
    return Entry(name=name, type=classify(name), path=f"{base}/{name}")


@pytest.fixture
def abc_category():
    base = "/pics/models/Set"
    return Category(name="Set", path=base, entries=tuple(
        image(n, base) for n in ("a.png", "b.png", "c.png")
    ))


@pytest.fixture
def mixed_category():
    base = "/pics/models/Mixed"
    return Category(name="Mixed", path=base, entries=(
        Entry(name="sub", type=EntryType.FOLDER, path=f"{base}/sub", images=("x.png", "y.gif")),
        Entry(name="empty", type=EntryType.FOLDER, path=f"{base}/empty", images=()),
        image("clip.mp4", base),
        image("part1.png", base),
    ))


@pytest.fixture
def single_category():
    base = "/pics/renders"
    return Category(name="still", path=base, entries=(image("still.png", base),))


@pytest.fixture
def single_video_category():
    base = "/pics/renders"
    return Category(name="clip", path=base, entries=(image("clip.mp4", base),))
