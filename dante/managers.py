"""Storage of songs, albums and artists in MongoDB collections."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from .schemas import Album, Artist, Song

T = TypeVar("T", Song, Album, Artist)


class Controller(Generic[T]):
    """Create, read, update and delete records of one kind, keyed by their ``id``."""

    collection_name: ClassVar[str]
    schema: ClassVar[type]

    def __init__(self, database: Any) -> None:
        self._collection = database[self.collection_name]

    def create(self, item: T) -> Any:
        """Insert ``item`` and return the database's insert result."""
        return self._collection.insert_one(item.to_document())

    def find(self, item_id: int) -> T | None:
        document = self._collection.find_one({"id": item_id})
        return None if document is None else self.schema.from_document(document)

    def get_all(self) -> list[T]:
        return [self.schema.from_document(document) for document in self._collection.find({})]

    def update(self, item: T) -> None:
        """Overwrite the stored record that has the same id as ``item``."""
        self._collection.find_one_and_update(
            {"id": item.id}, {"$set": item.to_document()}
        )

    def delete(self, item_id: int) -> None:
        self._collection.delete_one({"id": item_id})


class SongManager(Controller[Song]):
    collection_name = "Songs"
    schema = Song


class AlbumManager(Controller[Album]):
    collection_name = "Albums"
    schema = Album


class ArtistManager(Controller[Artist]):
    collection_name = "Artists"
    schema = Artist