"""Command-line interface for Vitrine."""

from __future__ import annotations
import argparse
import json
import sys
from typing import List, Optional

from . import config as cfg
from .logging import log, log_exception, set_quiet, set_stream
from .tree_builder import GalleryBuildError, build_gallery_tree, find_folder_thumbnail
from .types import categories_to_json


def cmd_tree(args: argparse.Namespace) -> int:
    try:
        categories = build_gallery_tree(args.root, args.folder)
    except GalleryBuildError as e:
        log_exception("CLI", e)
        return 1
    data = categories_to_json(categories)
    indent = 2 if args.pretty else None
    try:
        sys.stdout.write(json.dumps(data, indent=indent, ensure_ascii=False) + "\n")
    except UnicodeEncodeError as e:
        # Undecodable filenames arrive as lone surrogates; escape them instead
        log(f"[CLI] Non-encodable name in output, escaping: {e.reason}")
        sys.stdout.write(json.dumps(data, indent=indent, ensure_ascii=True) + "\n")
    return 0


def cmd_thumb(args: argparse.Namespace) -> int:
    try:
        thumb = find_folder_thumbnail(args.root, args.path)
    except GalleryBuildError as e:
        log_exception("CLI", e)
        return 1
    if thumb is None:
        log(f"[CLI] No thumbnail for {args.path}")
        return 1
    try:
        print(thumb)
    except UnicodeEncodeError:
        print(thumb.encode("ascii", "backslashreplace").decode("ascii"))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from .server import run_server
    run_server(args.root, host=args.host, port=args.port, category_filter=args.folder)
    return 0


def apply_view_overrides(args: argparse.Namespace) -> None:
    """Push view flags into the config module, where layout code reads them."""
    if args.columns is not None:
        setattr(cfg, "GRID_COLUMNS", max(1, args.columns))
    if args.folder_columns is not None:
        setattr(cfg, "FOLDER_COLUMNS", max(1, args.folder_columns))
    if args.fps is not None:
        setattr(cfg, "TARGET_FPS", max(1, args.fps))
    if args.keep_aspect is not None:
        setattr(cfg, "MAINTAIN_ASPECT_RATIO", args.keep_aspect)


def cmd_view(args: argparse.Namespace) -> int:
    if (args.root is None) == (args.remote is None):
        log("[CLI][ERR] view needs exactly one of ROOT or --remote")
        return 2
    apply_view_overrides(args)

    from .app import run_viewer
    run_viewer(root=args.root, remote_url=args.remote, category_filter=args.folder)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vitrine",
        description="Vitrine - browse a media directory as a gallery",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the gallery tree as JSON
  vitrine tree /srv/media

  # Only the "models" top-level folder
  vitrine tree /srv/media --folder models

  # Thumbnail for one folder
  vitrine thumb /srv/media "/pics/models/Set A"

  # Serve the JSON endpoint and media files
  vitrine serve /srv/media --port 8080

  # Open the desktop viewer, locally or against a server
  vitrine view /srv/media
  vitrine view --remote http://127.0.0.1:8080
"""
    )
    parser.add_argument("--version", action="version", version=f"vitrine {cfg.VERSION}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-q", "--quiet", action="store_true", help="Suppress log output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    tree_parser = subparsers.add_parser("tree", parents=[common], help="Print the gallery tree as JSON")
    tree_parser.add_argument("root", help="Media root directory")
    tree_parser.add_argument("--folder", help="Only this top-level folder")
    tree_parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    tree_parser.set_defaults(func=cmd_tree)

    thumb_parser = subparsers.add_parser("thumb", parents=[common],
                                         help="Print the thumbnail path for a public folder path")
    thumb_parser.add_argument("root", help="Media root directory")
    thumb_parser.add_argument("path", help=f"Public folder path, e.g. {cfg.PUBLIC_PREFIX}/models/Set A")
    thumb_parser.set_defaults(func=cmd_thumb)

    serve_parser = subparsers.add_parser("serve", parents=[common],
                                         help="Serve the gallery JSON and media over HTTP")
    serve_parser.add_argument("root", help="Media root directory")
    serve_parser.add_argument("--host", default=cfg.HTTP_HOST,
                              help=f"Host to bind to (default: {cfg.HTTP_HOST})")
    serve_parser.add_argument("--port", "-p", type=int, default=cfg.HTTP_PORT,
                              help=f"Port number (default: {cfg.HTTP_PORT})")
    serve_parser.add_argument("--folder", help="Default top-level folder filter")
    serve_parser.set_defaults(func=cmd_serve)

    view_parser = subparsers.add_parser("view", parents=[common], help="Open the desktop viewer")
    view_parser.add_argument("root", nargs="?", help="Media root directory")
    view_parser.add_argument("--remote", help="Base URL of a running vitrine server")
    view_parser.add_argument("--folder", help="Only this top-level folder")
    view_parser.add_argument("--columns", type=int, help=f"Grid columns (default: {cfg.GRID_COLUMNS})")
    view_parser.add_argument("--folder-columns", type=int,
                             help=f"Folder listing columns (default: {cfg.FOLDER_COLUMNS})")
    view_parser.add_argument("--fps", type=int, help=f"Target frame rate (default: {cfg.TARGET_FPS})")
    view_parser.add_argument("--keep-aspect", action=argparse.BooleanOptionalAction, default=None,
                             help="Letterbox tile thumbnails instead of cropping them "
                                  f"(default: {'on' if cfg.MAINTAIN_ASPECT_RATIO else 'off'})")
    view_parser.set_defaults(func=cmd_view)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    set_quiet(args.quiet)
    # stdout carries command output
    set_stream(sys.stderr)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
