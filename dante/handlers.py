"""Request handlers for creating, listing, linking and deleting songs, albums and artists.

Each handler takes the database and the parts of a multipart request body, in
the order the client sends them. It returns the text to send back to the client.
"""

from __future__ import annotations

import json
import math
import re
from os import PathLike
from pathlib import Path
from typing import Any, Sequence, Union

from .managers import AlbumManager, ArtistManager, SongManager
from .schemas import Album, Artist, Song

Root = Union[str, "PathLike[str]"]

_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1
_USIZE_MAX = (1 << 64) - 1

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"\+?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)


def _text(parts: Sequence[bytes], index: int) -> str:
    """Decode one body part as UTF-8, replacing invalid bytes."""
    try:
        data = parts[index]
    except IndexError:
        raise ValueError(f"request body is missing part {index}") from None
    return bytes(data).decode("utf-8", errors="replace")


def _parse_i64(text: str) -> int:
    """Parse a signed 64-bit integer; anything unparsable becomes 0."""
    if not _SIGNED_INT.fullmatch(text):
        return 0
    value = int(text)
    return value if _I64_MIN <= value <= _I64_MAX else 0


def _parse_index(text: str) -> int:
    """Parse a non-negative list position; anything unparsable becomes 0."""
    if not _UNSIGNED_INT.fullmatch(text):
        return 0
    value = int(text)
    return value if value <= _USIZE_MAX else 0


def _parse_rating(text: str) -> float:
    """Parse a floating-point rating; anything unparsable becomes 0.0."""
    if not _FLOAT.fullmatch(text):
        return 0.0
    return float(text)


def _remove_at(ids: list[int], position: int) -> None:
    if position >= len(ids):
        raise IndexError(
            f"removal index (is {position}) should be < len (is {len(ids)})"
        )
    del ids[position]


def _to_json(records: Sequence[Song | Album | Artist]) -> str:
    documents = []
    for record in records:
        document = record.to_document()
        rating = document.get("rating")
        if isinstance(rating, float) and not math.isfinite(rating):
            document["rating"] = None
        documents.append(document)
    return json.dumps(documents, indent=2, ensure_ascii=False)


# Creation


def create_song(database: Any, parts: Sequence[bytes], root: Root) -> str:
    """Store a song from parts (title, genre, audio, cover image)."""
    manager = SongManager(database)
    song = Song(title=_text(parts, 0), genre=_text(parts, 1))
    audio = bytes(parts[2]) if len(parts) > 2 else None
    cover = bytes(parts[3]) if len(parts) > 3 else None
    if audio is None:
        raise ValueError("request body is missing part 2")
    if cover is None:
        raise ValueError("request body is missing part 3")
    base = Path(root)
    (base / "songs" / f"{song.id}.mp3").write_bytes(audio)
    (base / "images" / "song" / f"{song.id}.png").write_bytes(cover)
    output = f"Uploaded with id: {song.id}"
    manager.create(song)
    return output


def create_album(database: Any, parts: Sequence[bytes], root: Root) -> str:
    """Store an album from parts (title, cover image)."""
    manager = AlbumManager(database)
    album = Album(title=_text(parts, 0))
    if len(parts) < 2:
        raise ValueError("request body is missing part 1")
    (Path(root) / "images" / "album" / f"{album.id}.png").write_bytes(bytes(parts[1]))
    output = f"Uploaded with id: {album.id}"
    manager.create(album)
    return output


def create_artist(database: Any, parts: Sequence[bytes], root: Root) -> str:
    """Store an artist from parts (name, rating, picture)."""
    manager = ArtistManager(database)
    name = _text(parts, 0)
    rating = _parse_rating(_text(parts, 1))
    if len(parts) < 3:
        raise ValueError("request body is missing part 2")
    artist = Artist(name=name, rating=rating)
    (Path(root) / "images" / "artist" / f"{artist.id}.png").write_bytes(bytes(parts[2]))
    output = f"Uploaded with id: {artist.id}"
    manager.create(artist)
    return output


# Linking


def add_song_album(database: Any, parts: Sequence[bytes]) -> str:
    """Append a song id to an album, from parts (song id, album id)."""
    manager = AlbumManager(database)
    song_id = _text(parts, 0)
    album_id = _text(parts, 1)
    album = manager.find(_parse_i64(album_id))
    if album is None:
        return "No album found!"
    album.songs.append(_parse_i64(song_id))
    manager.update(album)
    return f"Added song to : {album_id}"


def add_song_artist(database: Any, parts: Sequence[bytes]) -> str:
    """Append a song id to an artist, from parts (song id, artist id)."""
    manager = ArtistManager(database)
    song_id = _text(parts, 0)
    artist_id = _text(parts, 1)
    artist = manager.find(_parse_i64(artist_id))
    if artist is None:
        return "No artist found!"
    artist.songs.append(_parse_i64(song_id))
    manager.update(artist)
    return f"Added song to : {artist_id}"


def add_album_artist(database: Any, parts: Sequence[bytes]) -> str:
    """Append an album id to an artist, from parts (album id, artist id)."""
    manager = ArtistManager(database)
    album_id = _text(parts, 0)
    artist_id = _text(parts, 1)
    artist = manager.find(_parse_i64(artist_id))
    if artist is None:
        return "No album found!"
    artist.albums.append(_parse_i64(album_id))
    manager.update(artist)
    return f"Added album to : {artist_id}"


# Unlinking: the first part is a position in the list, not an id.


def remove_song_album(database: Any, parts: Sequence[bytes]) -> str:
    """Remove the song at a position of an album's list, from parts (position, album id)."""
    manager = AlbumManager(database)
    position = _text(parts, 0)
    album_id = _text(parts, 1)
    album = manager.find(_parse_i64(album_id))
    if album is None:
        return "No album found!"
    _remove_at(album.songs, _parse_index(position))
    manager.update(album)
    return f"Removed song to : {album_id}"


def remove_song_artist(database: Any, parts: Sequence[bytes]) -> str:
    """Remove the song at a position of an artist's list, from parts (position, artist id)."""
    manager = ArtistManager(database)
    position = _text(parts, 0)
    artist_id = _text(parts, 1)
    artist = manager.find(_parse_i64(artist_id))
    if artist is None:
        return "No artist found!"
    _remove_at(artist.songs, _parse_index(position))
    manager.update(artist)
    return f"Removed song to : {artist_id}"


def remove_album_artist(database: Any, parts: Sequence[bytes]) -> str:
    """Remove the album at a position of an artist's list, from parts (position, artist id)."""
    manager = ArtistManager(database)
    position = _text(parts, 0)
    artist_id = _text(parts, 1)
    artist = manager.find(_parse_i64(artist_id))
    if artist is None:
        return "No album found!"
    _remove_at(artist.albums, _parse_index(position))
    manager.update(artist)
    return f"Removed album to : {artist_id}"


# Deletion


def delete_album(database: Any, parts: Sequence[bytes]) -> str:
    """Delete an album and drop its id from every artist."""
    albums = AlbumManager(database)
    artists = ArtistManager(database)
    album_id = _parse_i64(_text(parts, 0))
    if albums.find(album_id) is None:
        return "No album found!"
    albums.delete(album_id)
    for artist in artists.get_all():
        if album_id in artist.albums:
            artist.albums = [a for a in artist.albums if a != album_id]
            artists.update(artist)
    return f"Removed album : {album_id}"


def delete_artist(database: Any, parts: Sequence[bytes]) -> str:
    """Delete an artist."""
    artists = ArtistManager(database)
    artist_id = _parse_i64(_text(parts, 0))
    if artists.find(artist_id) is None:
        return "No artist found!"
    artists.delete(artist_id)
    return f"Removed artist : {artist_id}"


def delete_song(database: Any, parts: Sequence[bytes]) -> str:
    """Delete a song and drop its id from every artist and album."""
    songs = SongManager(database)
    artists = ArtistManager(database)
    albums = AlbumManager(database)
    song_id = _parse_i64(_text(parts, 0))
    if songs.find(song_id) is None:
        return "No album found!"
    songs.delete(song_id)
    for artist in artists.get_all():
        if song_id in artist.songs:
            artist.songs = [s for s in artist.songs if s != song_id]
            artists.update(artist)
    for album in albums.get_all():
        if song_id in album.songs:
            album.songs = [s for s in album.songs if s != song_id]
            albums.update(album)
    return f"Removed song : {song_id}"


# Listing


def get_all_songs(database: Any) -> str:
    """Return every song as pretty-printed JSON."""
    return _to_json(SongManager(database).get_all())


def get_all_albums(database: Any) -> str:
    """Return every album as pretty-printed JSON."""
    return _to_json(AlbumManager(database).get_all())


def get_all_artists(database: Any) -> str:
    """Return every artist as pretty-printed JSON."""
    return _to_json(ArtistManager(database).get_all())