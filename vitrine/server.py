"""Flask server: JSON gallery tree, folder thumbnails and read-only media files."""

from __future__ import annotations
import os
from typing import Optional

from flask import Flask, abort, jsonify, request, send_from_directory

from . import config as cfg
from .classifier import is_allowed
from .logging import log, log_exception
from .paths import to_filesystem
from .tree_builder import GalleryBuildError, build_gallery_tree, find_folder_thumbnail
from .types import categories_to_json


def create_app(root: str, category_filter: Optional[str] = None) -> Flask:
    """Build the Flask app serving the gallery under root.

    category_filter is the default ``folder`` for requests that do not pass one.
    """
    app = Flask(__name__)
    app.config["GALLERY_ROOT"] = os.path.abspath(root)
    app.config["GALLERY_FOLDER"] = category_filter

    @app.route(cfg.GALLERY_ENDPOINT)
    def gallery():
        folder = request.args.get("folder") or app.config["GALLERY_FOLDER"]
        try:
            categories = build_gallery_tree(app.config["GALLERY_ROOT"], folder)
        except GalleryBuildError as e:
            log_exception("HTTP", e)
            return jsonify([]), 500
        log(f"[HTTP] gallery folder={folder!r}: {len(categories)} categories")
        return jsonify(categories_to_json(categories))

    @app.route(cfg.THUMBNAIL_ENDPOINT)
    def thumbnail():
        path = request.args.get("path", "")
        try:
            thumb = find_folder_thumbnail(app.config["GALLERY_ROOT"], path)
        except GalleryBuildError as e:
            log_exception("HTTP", e)
            thumb = None
        return jsonify({"thumbnail": thumb})

    @app.route(cfg.PUBLIC_PREFIX.rstrip("/") + "/<path:subpath>")
    def media(subpath: str):
        gallery_root = app.config["GALLERY_ROOT"]
        local = to_filesystem(gallery_root, cfg.PUBLIC_PREFIX.rstrip("/") + "/" + subpath)
        if local is None or not os.path.isfile(local):
            abort(404)
        name = os.path.basename(local)
        if name.startswith(".") or not is_allowed(name):
            abort(404)
        return send_from_directory(os.path.dirname(local), name)

    return app


def run_server(root: str, host: str = cfg.HTTP_HOST, port: int = cfg.HTTP_PORT,
               category_filter: Optional[str] = None) -> None:
    app = create_app(root, category_filter)
    log(f"[HTTP] Serving {os.path.abspath(root)} on http://{host}:{port}")
    app.run(host=host, port=port)
