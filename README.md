# dante

A small HTTP server for a personal music library. Songs, albums and artists
are kept in a MongoDB database named `Dante-main`; audio files and cover
images are kept on disk and served back as static files.

## Installing

```
pip install .
```

## Running

The `dante` command reads the MongoDB connection string from the
`MONGO_URI` environment variable; a `.env` file in the working directory is
loaded first. It stops with an error if `MONGO_URI` is not set.

```
MONGO_URI=mongodb://localhost:27017 dante
```

Options:

- `--host` – address to listen on (default `0.0.0.0`)
- `--port` – port to listen on (default `3300`)
- `--root` – directory holding `ui/`, `songs/` and `images/` (default `.`)

The root directory must already hold:

- `ui/index.html`, the page served at `/`
- `songs/`, where uploaded `.mp3` files are written
- `images/song/`, `images/album/`, `images/artist/`, where cover images are
  written as `<id>.png`

These directories are not created by the server. Request bodies larger than
10 MB are refused.

## Endpoints

Reading:

| Method | Path            | Result                                |
|--------|-----------------|---------------------------------------|
| GET    | `/`             | `ui/index.html`                       |
| GET    | `/getSongs`     | every song as pretty-printed JSON     |
| GET    | `/getAlbums`    | every album as pretty-printed JSON    |
| GET    | `/getArtists`   | every artist as pretty-printed JSON   |
| GET    | `/song/<file>`  | a file from `songs/`                  |
| GET    | `/image/<file>` | a file from `images/`                 |

Writing is done with multipart POST requests. The parts are read by
position, in this order:

| Path                    | Parts, in order                      |
|-------------------------|--------------------------------------|
| `/create-song`          | title, genre, audio, image           |
| `/create-album`         | title, image                         |
| `/create-artist`        | name, rating, image                  |
| `/album/add-song`       | song id, album id                    |
| `/artist/add-song`      | song id, artist id                   |
| `/artist/add-album`     | album id, artist id                  |
| `/album/remove-song`    | position in the album's songs, album id   |
| `/artist/remove-song`   | position in the artist's songs, artist id |
| `/artist/remove-album`  | position in the artist's albums, artist id|
| `/album/delete`         | album id                             |
| `/artist/delete`        | artist id                            |
| `/song/delete`          | song id                              |

Every answer is plain text. Each create answers `Uploaded with id: <id>`.
Ids and positions that cannot be parsed are taken as `0`, as is an
unparsable rating (`0.0`). When the record to change is not found the answer
names it, for example `No album found!`. The remove endpoints take a position
in the list, not an id. Deleting a song also removes it from every album and
artist that lists it; deleting an album removes it from every artist that
lists it.

A request that is not multipart, or lacks a part, is answered with status 400
and the reason.

## Using it as a library

- `dante.schemas` – the `Song`, `Album` and `Artist` dataclasses, each with
  `to_document()` and `from_document(document)`. New records get a random
  non-negative 64-bit id from `dante.ids.generate_id()`.
- `dante.managers` – `SongManager`, `AlbumManager` and `ArtistManager`, each
  with `create`, `find`, `get_all`, `update` and `delete`, over the
  `Songs`, `Albums` and `Artists` collections of a database.
- `dante.handlers` – the work behind each endpoint, as functions taking a
  database and the list of body parts and returning the reply text.
- `dante.app.create_app(database, root)` – the Flask application.

```python
from pymongo import MongoClient
from dante.app import create_app
from dante.managers import SongManager
from dante.schemas import Song

database = MongoClient("mongodb://localhost:27017")["Dante-main"]
songs = SongManager(database)
songs.create(Song(title="Intro", genre="Rock"))
print([song.title for song in songs.get_all()])

app = create_app(database, ".")
```

## What it does not do

The package does not ship the web page served at `/`; `ui/index.html` must
be supplied. There is no authentication: anyone who can reach the server can
upload and delete records.

## Tests

```
pip install ".[test]"
pytest
```