from vitrine.thumbnails import resolve_thumbnail
from vitrine.types import Category, Entry, EntryType


def entry(name, etype, base="/pics/c", images=None):
    return Entry(name=name, type=etype, path=f"{base}/{name}", images=images)


def test_folder_only_category_uses_first_folder_image():
    cat = Category(name="c", path="/pics/c", entries=(
        entry("empty", EntryType.FOLDER, images=()),
        entry("f", EntryType.FOLDER, images=("z.png", "a.png")),
    ))
    assert resolve_thumbnail(cat) == "/pics/c/f/z.png"


def test_thumb_png_wins():
    cat = Category(name="c", path="/pics/c", entries=(
        entry("a.png", EntryType.IMAGE),
        entry("thumb.png", EntryType.IMAGE),
    ))
    assert resolve_thumbnail(cat) == "/pics/c/thumb.png"


def test_first_media_entry_before_folders():
    cat = Category(name="c", path="/pics/c", entries=(
        entry("f", EntryType.FOLDER, images=("z.png",)),
        entry("clip.mp4", EntryType.VIDEO),
        entry("b.png", EntryType.IMAGE),
    ))
    assert resolve_thumbnail(cat) == "/pics/c/clip.mp4"


def test_placeholder_when_nothing_usable():
    assert resolve_thumbnail(Category(name="c", path="/pics/c")) == "/placeholder.png"
    cat = Category(name="c", path="/pics/c", entries=(entry("f", EntryType.FOLDER, images=()),))
    assert resolve_thumbnail(cat) == "/placeholder.png"
