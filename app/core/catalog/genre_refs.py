"""
Genre references supplied when creating or updating a movie.

A reference either points at an existing genre by ID or names a genre that
is reused when it exists and created otherwise.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Union

from sqlalchemy.orm import Session

from app.core.catalog.errors import ValidationError
from app.database import crud


@dataclass(frozen=True)
class GenreById:
    genre_id: int


@dataclass(frozen=True)
class GenreByName:
    name: str


GenreRef = Union[GenreById, GenreByName]


def parse_genre_ref(raw: Any) -> GenreRef:
    """
    Convert a raw JSON value into a genre reference.

    Integers become GenreById, non-empty strings become GenreByName.

    Raises:
        ValidationError: For any other value
    """
    if isinstance(raw, (GenreById, GenreByName)):
        return raw
    if isinstance(raw, int) and not isinstance(raw, bool):
        return GenreById(raw)
    if isinstance(raw, str) and raw.strip():
        return GenreByName(raw.strip())
    raise ValidationError(f"Invalid genre reference: {raw!r}")


def parse_genre_refs(values: Iterable[Any]) -> List[GenreRef]:
    return [parse_genre_ref(v) for v in values]


def resolve_genre_ids(session: Session, refs: Iterable[GenreRef]) -> List[int]:
    """
    Resolve references to genre IDs, creating named genres that don't exist yet.

    Duplicates are dropped while keeping the first occurrence's position.

    Args:
        session: Database session
        refs: Genre references

    Returns:
        List of distinct genre IDs

    Raises:
        ValidationError: If a GenreById points at no genre
    """
    resolved: List[int] = []
    for ref in refs:
        if isinstance(ref, GenreById):
            genre = crud.get_genre(session, ref.genre_id)
            if genre is None:
                raise ValidationError(f"Genre {ref.genre_id} does not exist")
        else:
            genre, _ = crud.get_or_create_genre(session, ref.name)
        if genre.id_genre not in resolved:
            resolved.append(genre.id_genre)
    return resolved
