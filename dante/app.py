"""HTTP server exposing the music library: listing, uploads, links and static media."""

from __future__ import annotations

import argparse
import os
from email import message_from_bytes
from functools import partial
from pathlib import Path
from typing import Any, Callable

from dotenv import load_dotenv
from flask import Flask, Response, abort, request, send_from_directory
from pymongo import MongoClient

from . import handlers
from .handlers import Root

MAX_UPLOAD_BYTES = 10_000_000
DEFAULT_PORT = 3300
DATABASE_NAME = "Dante-main"

_LISTINGS: dict[str, Callable[[Any], str]] = {
    "/getSongs": handlers.get_all_songs,
    "/getArtists": handlers.get_all_artists,
    "/getAlbums": handlers.get_all_albums,
}

_UPLOADS: dict[str, Callable[[Any, list[bytes], Root], str]] = {
    "/create-song": handlers.create_song,
    "/create-album": handlers.create_album,
    "/create-artist": handlers.create_artist,
}

_ACTIONS: dict[str, Callable[[Any, list[bytes]], str]] = {
    "/album/add-song": handlers.add_song_album,
    "/artist/add-song": handlers.add_song_artist,
    "/artist/add-album": handlers.add_album_artist,
    "/album/remove-song": handlers.remove_song_album,
    "/artist/remove-song": handlers.remove_song_artist,
    "/artist/remove-album": handlers.remove_album_artist,
    "/album/delete": handlers.delete_album,
    "/artist/delete": handlers.delete_artist,
    "/song/delete": handlers.delete_song,
}


def _body_parts() -> list[bytes]:
    """Split the current multipart request body into its parts, in order."""
    length = request.content_length
    if length is not None and length > MAX_UPLOAD_BYTES:
        abort(413)
    content_type = request.headers.get("Content-Type", "")
    if not content_type.lower().startswith("multipart/"):
        raise ValueError("request body must be multipart form data")
    raw = (
        b"Content-Type: "
        + content_type.encode("latin-1")
        + b"\r\n\r\n"
        + request.get_data()
    )
    message = message_from_bytes(raw)
    if not message.is_multipart():
        raise ValueError("request body is not valid multipart data")
    return [part.get_payload(decode=True) or b"" for part in message.get_payload()]


def _plain(text: str) -> Response:
    return Response(text, mimetype="text/plain")


def _endpoint(path: str) -> str:
    return path.strip("/").replace("/", "_").replace("-", "_")


def create_app(database: Any, root: Root) -> Flask:
    """Build the web application serving ``database`` and the media stored under ``root``."""
    base = Path(root).resolve()
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES

    @app.errorhandler(ValueError)
    def _bad_request(error: ValueError) -> tuple[Response, int]:
        return _plain(str(error)), 400

    @app.get("/")
    def index() -> Response:
        page = (base / "ui" / "index.html").read_text(encoding="utf-8")
        return Response(page, mimetype="text/html")

    def listing(handler: Callable[[Any], str]) -> Response:
        return Response(handler(database), mimetype="application/json")

    def upload(handler: Callable[[Any, list[bytes], Root], str]) -> Response:
        return _plain(handler(database, _body_parts(), base))

    def action(handler: Callable[[Any, list[bytes]], str]) -> Response:
        return _plain(handler(database, _body_parts()))

    for path, handler in _LISTINGS.items():
        app.add_url_rule(
            path, endpoint=_endpoint(path), view_func=partial(listing, handler), methods=["GET"]
        )
    for path, handler in _UPLOADS.items():
        app.add_url_rule(
            path, endpoint=_endpoint(path), view_func=partial(upload, handler), methods=["POST"]
        )
    for path, handler in _ACTIONS.items():
        app.add_url_rule(
            path, endpoint=_endpoint(path), view_func=partial(action, handler), methods=["POST"]
        )

    @app.get("/song/<path:filename>")
    def song_file(filename: str) -> Response:
        return send_from_directory(base / "songs", filename)

    @app.get("/image/<path:filename>")
    def image_file(filename: str) -> Response:
        return send_from_directory(base / "images", filename)

    return app


def main(argv: list[str] | None = None) -> int:
    """Connect to the database named by MONGO_URI and serve the library."""
    parser = argparse.ArgumentParser(prog="dante", description="Serve the music library.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--root", default=".", help="directory holding ui/, songs/ and images/")
    args = parser.parse_args(argv)

    load_dotenv()
    uri = os.environ.get("MONGO_URI")
    if not uri:
        parser.error("MONGO_URI is not set")

    client = MongoClient(uri)
    app = create_app(client[DATABASE_NAME], args.root)
    print(f"Dante server started on port {args.port}!")
    app.run(host=args.host, port=args.port)
    return 0