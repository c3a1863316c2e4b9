import pytest

from conftest import FakePlatform
from vitrine.state import ViewLevel
from vitrine.types import Category, Entry, EntryType
from vitrine.viewer import Key, Viewer


@pytest.fixture
def viewer(platform, abc_category, mixed_category, single_category, single_video_category):
    v = Viewer(platform, [abc_category, mixed_category, single_category, single_video_category])
    v.set_container_size(800, 600)
    return v


def open_item(viewer, category, name):
    assert viewer.open_category(category)
    entry = next(e for e in category.entries if e.name == name)
    assert viewer.open_entry(entry)
    return entry


# ─── Navigation ──────────────────────────────────────────────────────────────

def test_starts_at_grid(viewer):
    assert viewer.level is ViewLevel.GRID
    assert viewer.current_path is None
    assert not viewer.zoom_enabled


def test_open_category_only_from_grid(viewer, abc_category, mixed_category):
    assert viewer.open_category(abc_category)
    assert viewer.level is ViewLevel.FOLDER
    assert viewer.state.category is abc_category
    assert not viewer.open_category(mixed_category)
    assert viewer.state.category is abc_category


def test_open_entry_requires_folder_level(viewer, abc_category):
    assert not viewer.open_entry(abc_category.entries[0])
    assert viewer.level is ViewLevel.GRID


def test_open_entry_rejects_foreign_entry(viewer, abc_category, mixed_category):
    viewer.open_category(abc_category)
    assert not viewer.open_entry(mixed_category.entries[0])
    assert viewer.level is ViewLevel.FOLDER


def test_navigation_wraps(viewer, abc_category):
    open_item(viewer, abc_category, "b.png")
    assert viewer.state.index == 1
    assert viewer.current_path == "/pics/models/Set/b.png"

    for _ in range(3):
        viewer.next()
    assert viewer.state.index == 1

    viewer.prev()
    assert viewer.state.index == 0
    viewer.prev()
    assert viewer.state.index == 2
    assert viewer.current_path == "/pics/models/Set/c.png"


def test_folder_entry_sequence(viewer, mixed_category):
    open_item(viewer, mixed_category, "sub")

    assert viewer.state.index == 0
    assert viewer.state.nav.sequence == ["/pics/models/Mixed/sub/x.png", "/pics/models/Mixed/sub/y.gif"]
    assert viewer.next()
    assert viewer.current_type is EntryType.GIF
    assert viewer.next()
    assert viewer.current_path == "/pics/models/Mixed/sub/x.png"


def test_media_entry_sequence_skips_folders(viewer, mixed_category):
    open_item(viewer, mixed_category, "part1.png")

    assert viewer.state.nav.sequence == ["/pics/models/Mixed/clip.mp4", "/pics/models/Mixed/part1.png"]
    assert viewer.state.index == 1
    viewer.next()
    assert viewer.current_type is EntryType.VIDEO
    assert not viewer.zoom_enabled


def test_empty_folder_entry_is_a_no_op_sequence(viewer, mixed_category):
    open_item(viewer, mixed_category, "empty")

    assert viewer.level is ViewLevel.ITEM
    assert viewer.current_path is None
    assert viewer.state.nav.count == 0
    assert not viewer.next()
    assert not viewer.prev()
    assert not viewer.wheel(1)


def test_single_item_navigation_is_a_no_op(platform):
    cat = Category("c", "/pics/c", (
        Entry("only", EntryType.FOLDER, "/pics/c/only", images=("x.png",)),
        Entry("b.png", EntryType.IMAGE, "/pics/c/b.png"),
    ))
    viewer = Viewer(platform, [cat])
    viewer.open_category(cat)
    viewer.open_entry(cat.entries[0])

    assert viewer.state.nav.count == 1
    assert not viewer.next()
    assert not viewer.prev()
    assert viewer.current_path == "/pics/c/only/x.png"


def test_escape_moves_one_level(viewer, abc_category):
    open_item(viewer, abc_category, "a.png")

    assert viewer.escape()
    assert viewer.level is ViewLevel.FOLDER
    assert viewer.state.category is abc_category
    assert viewer.escape()
    assert viewer.level is ViewLevel.GRID
    assert viewer.state.category is None
    assert not viewer.escape()


def test_returning_to_grid_clears_view(viewer, abc_category):
    open_item(viewer, abc_category, "a.png")
    viewer.wheel(1)
    viewer.escape()
    viewer.escape()
    assert viewer.state.zoom == 1.0
    assert viewer.state.view.pan == (0.0, 0.0)


def test_set_categories_returns_to_grid(viewer, abc_category):
    open_item(viewer, abc_category, "a.png")
    viewer.set_categories([abc_category])
    assert viewer.level is ViewLevel.GRID
    assert viewer.state.categories == [abc_category]


# ─── Auto-expand ─────────────────────────────────────────────────────────────

def test_single_media_category_auto_expands(viewer, single_category, platform):
    viewer.open_category(single_category)

    assert viewer.level is ViewLevel.FOLDER
    assert viewer.state.nav.is_auto_expanded
    assert viewer.state.nav.shows_media
    assert viewer.current_path == "/pics/renders/still.png"
    assert viewer.zoom_enabled
    assert not platform.background_scroll_enabled

    assert viewer.escape()
    assert viewer.level is ViewLevel.GRID
    assert platform.background_scroll_enabled


def test_single_video_auto_expands_without_zoom(viewer, single_video_category):
    viewer.open_category(single_video_category)
    assert viewer.state.nav.is_auto_expanded
    assert viewer.current_type is EntryType.VIDEO
    assert not viewer.zoom_enabled
    assert not viewer.toggle_fullscreen()


# ─── Zoom and pan ────────────────────────────────────────────────────────────

def test_wheel_zoom_only_on_zoomable_media(viewer, abc_category):
    assert not viewer.wheel(1)
    viewer.open_category(abc_category)
    assert not viewer.wheel(1)
    viewer.open_entry(abc_category.entries[0])
    assert viewer.wheel(1)
    assert viewer.state.zoom == 1.1
    assert not viewer.wheel(0)


def test_zoom_bounds(viewer, abc_category):
    open_item(viewer, abc_category, "a.png")
    for _ in range(50):
        viewer.wheel(1)
    assert viewer.state.zoom == 3.0
    for _ in range(50):
        viewer.wheel(-1)
    assert viewer.state.zoom == 0.5
    assert viewer.state.view.pan == (0.0, 0.0)


def test_navigation_resets_zoom(viewer, abc_category):
    open_item(viewer, abc_category, "a.png")
    viewer.wheel(1)
    viewer.next()
    assert viewer.state.zoom == 1.0


def test_drag_only_while_zoomed(viewer, abc_category):
    open_item(viewer, abc_category, "a.png")
    assert not viewer.pointer_down(10, 10)

    for _ in range(10):
        viewer.wheel(1)
    assert viewer.state.zoom == 2.0
    assert viewer.pointer_down(100, 100)
    assert viewer.pointer_move(150, 90)
    assert viewer.state.view.pan == (50, -10)

    viewer.pointer_move(10_000, -10_000)
    assert viewer.state.view.pan == (400, -300)

    assert viewer.pointer_leave()
    assert not viewer.state.input.is_dragging
    assert not viewer.pointer_move(0, 0)


def test_zooming_back_to_one_recenters_and_ends_drag(viewer, abc_category):
    open_item(viewer, abc_category, "a.png")
    viewer.wheel(1)
    viewer.pointer_down(0, 0)
    viewer.pointer_move(40, 30)
    assert viewer.state.view.pan == (40, 30)

    viewer.wheel(-1)
    assert viewer.state.zoom == 1.0
    assert viewer.state.view.pan == (0.0, 0.0)
    assert not viewer.state.input.is_dragging


def test_container_resize_reclamps_pan(viewer, abc_category):
    open_item(viewer, abc_category, "a.png")
    for _ in range(10):
        viewer.wheel(1)
    viewer.pointer_down(0, 0)
    viewer.pointer_move(10_000, 10_000)
    assert viewer.state.view.pan == (400, 300)

    viewer.set_container_size(400, 300)
    assert viewer.state.view.pan == (200, 150)


# ─── Fullscreen ──────────────────────────────────────────────────────────────

def test_escape_in_fullscreen_only_leaves_fullscreen(viewer, abc_category, platform):
    open_item(viewer, abc_category, "a.png")
    assert viewer.toggle_fullscreen()
    assert platform.fullscreen
    assert viewer.state.is_fullscreen

    assert viewer.escape()
    assert not platform.fullscreen
    assert not viewer.state.is_fullscreen
    assert viewer.level is ViewLevel.ITEM

    viewer.escape()
    assert viewer.level is ViewLevel.FOLDER


def test_close_leaves_fullscreen_and_pops(viewer, abc_category, platform):
    open_item(viewer, abc_category, "a.png")
    viewer.toggle_fullscreen()

    assert viewer.close()
    assert not platform.fullscreen
    assert viewer.level is ViewLevel.FOLDER
    assert viewer.close()
    assert viewer.level is ViewLevel.GRID
    assert not viewer.close()


def test_toggle_fullscreen_twice(viewer, abc_category, platform):
    open_item(viewer, abc_category, "a.png")
    viewer.toggle_fullscreen()
    viewer.toggle_fullscreen()
    assert not platform.fullscreen
    assert platform.exits == 1


def test_toggle_fullscreen_needs_zoomable_media(viewer, abc_category, platform):
    assert not viewer.toggle_fullscreen()
    viewer.open_category(abc_category)
    assert not viewer.toggle_fullscreen()
    assert platform.requests == 0


def test_external_fullscreen_change_is_mirrored(viewer, abc_category, platform):
    open_item(viewer, abc_category, "a.png")
    platform.set_external(True)
    assert viewer.state.is_fullscreen
    platform.set_external(False)
    assert not viewer.state.is_fullscreen


def test_refused_fullscreen_resyncs_to_platform():
    platform = FakePlatform(refuse=True)
    cat = Category("c", "/pics/c", (Entry("a.png", EntryType.IMAGE, "/pics/c/a.png"),))
    viewer = Viewer(platform, [cat])
    viewer.open_category(cat)

    viewer.toggle_fullscreen()
    assert viewer.state.is_fullscreen  # optimistic
    platform.notify_fullscreen_change()
    assert not viewer.state.is_fullscreen


def test_initial_fullscreen_comes_from_platform():
    viewer = Viewer(FakePlatform(fullscreen=True))
    assert viewer.state.is_fullscreen


# ─── Scroll lock ─────────────────────────────────────────────────────────────

def test_scroll_lock_follows_media_states(viewer, abc_category, platform):
    assert platform.background_scroll_enabled
    viewer.open_category(abc_category)
    assert platform.background_scroll_enabled
    viewer.open_entry(abc_category.entries[0])
    assert not platform.background_scroll_enabled
    assert viewer.scroll_lock.held
    viewer.next()
    assert not platform.background_scroll_enabled
    viewer.escape()
    assert platform.background_scroll_enabled
    assert not viewer.scroll_lock.held


def test_teardown_releases_everything(viewer, abc_category, platform):
    open_item(viewer, abc_category, "a.png")
    viewer.teardown()
    assert platform.background_scroll_enabled
    platform.set_external(True)
    assert not viewer.state.is_fullscreen


def test_context_manager_tears_down(platform, abc_category):
    with Viewer(platform, [abc_category]) as viewer:
        open_item(viewer, abc_category, "a.png")
        assert not platform.background_scroll_enabled
    assert platform.background_scroll_enabled


def test_grid_scroll_clamped_and_locked(viewer, abc_category):
    viewer.state.window.grid_scroll_max = 500
    assert viewer.scroll_grid(100)
    assert viewer.state.window.grid_scroll == 100
    assert viewer.scroll_grid(10_000)
    assert viewer.state.window.grid_scroll == 500
    assert viewer.scroll_grid(-10_000)
    assert viewer.state.window.grid_scroll == 0
    assert not viewer.scroll_grid(-1)

    viewer.open_category(abc_category)
    viewer.state.window.grid_scroll_max = 500
    viewer.open_entry(abc_category.entries[0])
    assert not viewer.scroll_grid(100)


# ─── Keyboard ────────────────────────────────────────────────────────────────

def test_keys_ignored_on_grid(viewer):
    for key in Key:
        assert not viewer.handle_key(key)


def test_arrow_keys_only_at_item_level(viewer, abc_category):
    viewer.open_category(abc_category)
    assert not viewer.handle_key(Key.ARROW_RIGHT)
    viewer.open_entry(abc_category.entries[0])
    assert viewer.handle_key(Key.ARROW_RIGHT)
    assert viewer.state.index == 1
    assert viewer.handle_key(Key.ARROW_LEFT)
    assert viewer.handle_key(Key.ARROW_LEFT)
    assert viewer.state.index == 2


def test_escape_and_fullscreen_keys(viewer, abc_category, platform):
    open_item(viewer, abc_category, "a.png")
    assert viewer.handle_key(Key.FULLSCREEN)
    assert platform.fullscreen
    assert viewer.handle_key(Key.ESCAPE)
    assert not platform.fullscreen
    assert viewer.level is ViewLevel.ITEM
    assert viewer.handle_key(Key.ESCAPE)
    assert viewer.level is ViewLevel.FOLDER
