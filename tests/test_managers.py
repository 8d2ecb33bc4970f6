import copy
from dataclasses import dataclass
from itertools import count

import pytest

from dante.managers import AlbumManager, ArtistManager, SongManager
from dante.schemas import Album, Artist, Song


@dataclass
class _InsertResult:
    inserted_id: int


class _FakeCollection:
    def __init__(self):
        self.documents = []
        self._keys = count(1)

    @staticmethod
    def _matches(document, query):
        return all(document.get(k) == v for k, v in query.items())

    def insert_one(self, document):
        stored = copy.deepcopy(document)
        stored["_id"] = next(self._keys)
        self.documents.append(stored)
        return _InsertResult(stored["_id"])

    def find_one(self, query):
        return next((copy.deepcopy(d) for d in self.documents if self._matches(d, query)), None)

    def find(self, query):
        return (copy.deepcopy(d) for d in self.documents if self._matches(d, query))

    def find_one_and_update(self, query, update):
        for document in self.documents:
            if self._matches(document, query):
                before = copy.deepcopy(document)
                document.update(copy.deepcopy(update["$set"]))
                return before
        return None

    def delete_one(self, query):
        for index, document in enumerate(self.documents):
            if self._matches(document, query):
                del self.documents[index]
                return


class _FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, _FakeCollection())


@pytest.fixture
def db():
    return _FakeDatabase()


def test_create_song(db):
    result = SongManager(db).create(Song("Test1", "Rock"))
    assert result.inserted_id == 1
    assert db["Songs"].find_one({"title": "Test1"}) is not None
    assert len(db["Songs"].documents) == 1


def test_create_album(db):
    result = AlbumManager(db).create(Album("Test1"))
    assert result.inserted_id == 1
    assert db["Albums"].find_one({"title": "Test1"}) is not None
    assert len(db["Albums"].documents) == 1


def test_create_artist(db):
    result = ArtistManager(db).create(Artist("Test1", 5.0))
    assert result.inserted_id == 1
    assert db["Artists"].find_one({"name": "Test1"}) is not None
    assert len(db["Artists"].documents) == 1


def test_find_song(db):
    song = Song("Test1", "Rock")
    db["Songs"].insert_one(song.to_document())
    assert SongManager(db).find(song.id) == song


def test_find_album(db):
    album = Album("Test1")
    db["Albums"].insert_one(album.to_document())
    assert AlbumManager(db).find(album.id) == album


def test_find_artist(db):
    artist = Artist("Test1", 5.0)
    db["Artists"].insert_one(artist.to_document())
    assert ArtistManager(db).find(artist.id) == artist


def test_find_missing(db):
    assert SongManager(db).find(123) is None
    assert AlbumManager(db).find(123) is None
    assert ArtistManager(db).find(123) is None


def test_get_all_songs(db):
    song = Song("Test1", "Rock")
    db["Songs"].insert_one(song.to_document())
    assert SongManager(db).get_all() == [song]


def test_get_all_albums(db):
    album = Album("Test1")
    db["Albums"].insert_one(album.to_document())
    assert AlbumManager(db).get_all() == [album]


def test_get_all_artists(db):
    artist = Artist("Test1", 5.0)
    db["Artists"].insert_one(artist.to_document())
    assert ArtistManager(db).get_all() == [artist]


def test_update_song(db):
    song = Song("Test1", "Rock")
    db["Songs"].insert_one(song.to_document())
    song.title = "No"
    SongManager(db).update(song)
    found = db["Songs"].find_one({"id": song.id})
    assert found is not None
    assert found["title"] == "No"


def test_update_album(db):
    album = Album("Test1")
    db["Albums"].insert_one(album.to_document())
    album.title = "No"
    AlbumManager(db).update(album)
    found = db["Albums"].find_one({"id": album.id})
    assert found is not None
    assert found["title"] == "No"


def test_update_artist(db):
    artist = Artist("Test1", 5.0)
    db["Artists"].insert_one(artist.to_document())
    artist.name = "No"
    ArtistManager(db).update(artist)
    found = db["Artists"].find_one({"id": artist.id})
    assert found is not None
    assert found["name"] == "No"


def test_delete_song(db):
    song = Song("Test1", "Rock")
    db["Songs"].insert_one(song.to_document())
    SongManager(db).delete(song.id)
    assert db["Songs"].find_one({"id": song.id}) is None


def test_delete_album(db):
    album = Album("Test1")
    db["Albums"].insert_one(album.to_document())
    AlbumManager(db).delete(album.id)
    assert db["Albums"].find_one({"id": album.id}) is None


def test_delete_artist(db):
    artist = Artist("Test1", 5.0)
    db["Artists"].insert_one(artist.to_document())
    ArtistManager(db).delete(artist.id)
    assert db["Artists"].find_one({"id": artist.id}) is None


def test_update_keeps_lists(db):
    manager = ArtistManager(db)
    artist = Artist("Test1", 5.0)
    manager.create(artist)
    artist.songs.append(77)
    artist.albums.append(88)
    manager.update(artist)
    stored = manager.find(artist.id)
    assert stored.songs == [77]
    assert stored.albums == [88]


def test_delete_leaves_other_records(db):
    manager = AlbumManager(db)
    first, second = Album("A"), Album("B")
    manager.create(first)
    manager.create(second)
    manager.delete(first.id)
    assert manager.get_all() == [second]