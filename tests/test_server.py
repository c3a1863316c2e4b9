
import pytest

from vitrine.server import create_app
from vitrine.tree_builder import GalleryBuildError


@pytest.fixture
def root(make_tree):
    return make_tree({
        "models": {"Set A": {"part1.png": b"PNGDATA", "sub": {"x.png": b"X", "y.png": b"Y"}}},
        "renders": {"clip.mp4": b"VIDEO", "notes.txt": b"secret"},
        "secret.txt": b"nope",
    })


@pytest.fixture
def client(root):
    app = create_app(root)
    app.config["TESTING"] = True
    return app.test_client()


def test_gallery_endpoint(client):
    res = client.get("/api/gallery")
    assert res.status_code == 200
    data = res.get_json()
    assert [c["name"] for c in data] == ["Set A", "clip"]
    set_a = data[0]
    assert set_a["path"] == "/pics/models/Set A"
    assert set_a["items"][0] == {
        "name": "sub", "type": "folder", "path": "/pics/models/Set A/sub", "images": ["x.png", "y.png"],
    }
    assert set_a["items"][1] == {"name": "part1.png", "type": "image", "path": "/pics/models/Set A/part1.png"}


def test_gallery_folder_filter(client):
    data = client.get("/api/gallery?folder=renders").get_json()
    assert [c["name"] for c in data] == ["clip"]
    assert data[0]["items"][0]["type"] == "video"


def test_default_folder_filter(root):
    client = create_app(root, category_filter="models").test_client()
    assert [c["name"] for c in client.get("/api/gallery").get_json()] == ["Set A"]


def test_gallery_missing_root_is_empty(tmp_path):
    client = create_app(str(tmp_path / "missing")).test_client()
    res = client.get("/api/gallery")
    assert res.status_code == 200
    assert res.get_json() == []


def test_gallery_build_failure_is_500_with_empty_list(client, monkeypatch):
    def boom(root, folder=None):
        raise GalleryBuildError(root, PermissionError(13, "denied"))

    monkeypatch.setattr("vitrine.server.build_gallery_tree", boom)
    res = client.get("/api/gallery")
    assert res.status_code == 500
    assert res.get_json() == []


def test_thumbnail_endpoint(client):
    res = client.get("/api/thumbnail", query_string={"path": "/pics/models/Set A/sub"})
    assert res.get_json()["thumbnail"] in ("/pics/models/Set A/sub/x.png", "/pics/models/Set A/sub/y.png")
    res = client.get("/api/thumbnail", query_string={"path": "/pics/renders"})
    assert res.get_json() == {"thumbnail": None}


def test_media_served_read_only(client):
    res = client.get("/pics/models/Set A/part1.png")
    assert res.status_code == 200
    assert res.data == b"PNGDATA"
    res.close()
    assert client.post("/pics/models/Set A/part1.png").status_code == 405


def test_media_rejects_non_media_and_traversal(client):
    assert client.get("/pics/renders/notes.txt").status_code == 404
    assert client.get("/pics/secret.txt").status_code == 404
    assert client.get("/pics/models/missing.png").status_code == 404
    assert client.get("/pics/../secret.txt").status_code == 404
    assert client.get("/pics/models/..%2F..%2Fsecret.txt").status_code == 404
