"""Records stored by the server: songs, albums and artists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .ids import generate_id


def _require(document: Mapping[str, Any], key: str) -> Any:
    try:
        return document[key]
    except KeyError:
        raise ValueError(f"document is missing field {key!r}") from None


def _id_list(document: Mapping[str, Any], key: str) -> list[int]:
    value = _require(document, key)
    try:
        return [int(item) for item in value]
    except (TypeError, ValueError):
        raise ValueError(f"field {key!r} must be a list of integers") from None


def _int_field(document: Mapping[str, Any], key: str) -> int:
    value = _require(document, key)
    if isinstance(value, bool):
        raise ValueError(f"field {key!r} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"field {key!r} must be an integer") from None


def _str_field(document: Mapping[str, Any], key: str) -> str:
    value = _require(document, key)
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


@dataclass
class Song:
    """A single track."""

    title: str
    genre: str
    id: int = field(default_factory=generate_id)

    def to_document(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "genre": self.genre}

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Song":
        return cls(
            title=_str_field(document, "title"),
            genre=_str_field(document, "genre"),
            id=_int_field(document, "id"),
        )


@dataclass
class Album:
    """A named collection of song ids."""

    title: str
    songs: list[int] = field(default_factory=list)
    id: int = field(default_factory=generate_id)

    def to_document(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "songs": list(self.songs)}

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Album":
        return cls(
            title=_str_field(document, "title"),
            songs=_id_list(document, "songs"),
            id=_int_field(document, "id"),
        )


@dataclass
class Artist:
    """A performer with a rating and the ids of their albums and songs."""

    name: str
    rating: float = 0.0
    albums: list[int] = field(default_factory=list)
    songs: list[int] = field(default_factory=list)
    id: int = field(default_factory=generate_id)

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rating": float(self.rating),
            "albums": list(self.albums),
            "songs": list(self.songs),
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Artist":
        rating = _require(document, "rating")
        try:
            rating = float(rating)
        except (TypeError, ValueError):
            raise ValueError("field 'rating' must be a number") from None
        return cls(
            name=_str_field(document, "name"),
            rating=rating,
            albums=_id_list(document, "albums"),
            songs=_id_list(document, "songs"),
            id=_int_field(document, "id"),
        )