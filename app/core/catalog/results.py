"""
Result containers returned by the catalog services.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class QueryResult(Generic[T]):
    """
    Outcome of a read.

    On failure `value` still holds an empty collection (or None) so callers
    can render it directly, while `error` tells "no matches" apart from
    "the query failed".
    """

    value: T
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "QueryResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, empty: T, error: str) -> "QueryResult[T]":
        return cls(value=empty, error=error)


@dataclass
class CleanupFailure:
    """A candidate whose cascade delete failed and fell back to soft-expiry."""

    movie_id: int
    error: str


@dataclass
class ReconcileReport:
    """Summary of one lifecycle cleanup pass."""

    deleted_count: int = 0
    expired_count: int = 0
    failures: List[CleanupFailure] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "deletedCount": self.deleted_count,
            "expiredCount": self.expired_count,
            "failures": [{"movieId": f.movie_id, "error": f.error} for f in self.failures],
        }


@dataclass
class Pagination:
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        # ceil without floats
        return -(-self.total // self.limit) if self.limit > 0 else 0


@dataclass
class MoviePage:
    movies: list
    pagination: Pagination


@dataclass
class ExportMovie:
    """
    Flat movie record consumed by the export formatter.

    Genres are already joined into a single comma-separated string.
    """

    id_movie: int
    title: str
    status: str
    release_date: Optional[date] = None
    duration: Optional[int] = None
    original_title: Optional[str] = None
    director: Optional[str] = None
    actors: Optional[str] = None
    end_date: Optional[date] = None
    language: Optional[str] = None
    subtitle: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    poster_image: Optional[str] = None
    trailer_url: Optional[str] = None
    age_restriction: Optional[str] = None
    genres: Optional[str] = None

    @classmethod
    def from_movie(cls, movie, include_genres: bool = False) -> "ExportMovie":
        """Build a record from a Movie ORM object."""
        return cls(
            id_movie=movie.id_movie,
            title=movie.title,
            status=movie.status,
            release_date=movie.release_date,
            duration=movie.duration,
            original_title=movie.original_title,
            director=movie.director,
            actors=movie.actors,
            end_date=movie.end_date,
            language=movie.language,
            subtitle=movie.subtitle,
            country=movie.country,
            description=movie.description,
            poster_image=movie.poster_image,
            trailer_url=movie.trailer_url,
            age_restriction=movie.age_restriction,
            genres=", ".join(movie.genre_names) if include_genres else None,
        )

    @classmethod
    def from_mapping(cls, data: dict) -> "ExportMovie":
        """
        Build a record from a JSON payload as returned by the admin API.

        ISO date strings are parsed; unknown keys are ignored.
        """
        known = {name for name in cls.__dataclass_fields__}
        values = {k: v for k, v in data.items() if k in known}
        for key in ("release_date", "end_date"):
            raw = values.get(key)
            if isinstance(raw, str) and raw:
                values[key] = date.fromisoformat(raw[:10])
            elif raw == "":
                values[key] = None
        return cls(**values)
